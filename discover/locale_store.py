"""Session-scoped holder of the active locale with synchronous change notification."""

from __future__ import annotations

import logging
from typing import Union

from discover.i18n import SUPPORTED_LOCALES, Locale
from discover.observable import Observable

logger = logging.getLogger(__name__)


class LocaleStore(Observable[Locale]):
    """
    Single source of truth for the active locale

    Construct one per session and hand it to the views that need it.
    Only set_locale() and toggle_locale() write the locale; both notify
    subscribers in registration order before returning.
    """

    def __init__(self, initial: Union[Locale, str] = Locale.EN):
        super().__init__()
        self._locale = Locale(initial)

    @property
    def locale(self) -> Locale:
        return self._locale

    def get_locale(self) -> Locale:
        return self._locale

    def set_locale(self, locale: Union[Locale, str]):
        new = Locale(locale)
        if new is self._locale:
            return
        self._commit(new)

    def toggle_locale(self):
        idx = SUPPORTED_LOCALES.index(self._locale)
        self._commit(SUPPORTED_LOCALES[(idx + 1) % len(SUPPORTED_LOCALES)])

    def _commit(self, new: Locale):
        old, self._locale = self._locale, new
        logger.debug("locale %s -> %s", old.value, new.value)
        self._notify(new)
