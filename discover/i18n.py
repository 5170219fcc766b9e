"""Shared EN/AR strings for the Discover DXB screens."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple, Union


class Locale(str, Enum):
    EN = "en"
    AR = "ar"

    @property
    def language_code(self) -> str:
        return self.value


# cycle order for toggling
SUPPORTED_LOCALES: Tuple[Locale, ...] = (Locale.EN, Locale.AR)


class StringKey(Enum):
    APP_TITLE = "appTitle"
    DISCOVER_BUTTON = "discoverButton"
    HOME_PAGE = "homePage"
    DIRECTORY = "directory"
    ENGLISH = "english"
    ARABIC = "arabic"
    DISCOVER_DXB_DIRECTORY = "discoverDxbDirectory"
    DUBAI = "dubai"
    ABU_DHABI = "abuDhabi"
    SHARJAH = "sharjah"
    BURJ_KHALIFA = "burjKhalifa"
    BURJ_KHALIFA_DESCRIPTION = "burjKhalifaDescription"
    DUBAI_MALL = "dubaiMall"
    DUBAI_MALL_DESCRIPTION = "dubaiMallDescription"
    PALM_JUMEIRAH = "palmJumeirah"
    PALM_JUMEIRAH_DESCRIPTION = "palmJumeirahDescription"
    NO_TITLE = "noTitle"
    NO_IMAGE_FOUND = "noImageFound"
    EMPTY_DESCRIPTION = "emptyDescription"
    FAVORITE = "favorite"
    SELECT_LANGUAGE = "selectLanguage"
    SWITCH_LANGUAGE = "switchLanguage"

    @property
    def attr(self) -> str:
        """snake_case attribute name on StringTable"""
        return self.name.lower()


# Single space, kept so an empty description still reserves a text line.
PLACEHOLDER_KEYS: FrozenSet[StringKey] = frozenset({StringKey.EMPTY_DESCRIPTION})

# Language names are written in their own script in every locale.
SHARED_KEYS: FrozenSet[StringKey] = frozenset({StringKey.ENGLISH, StringKey.ARABIC})


@dataclass(frozen=True)
class StringTable:
    app_title: str
    discover_button: str
    home_page: str
    directory: str
    english: str
    arabic: str
    discover_dxb_directory: str
    dubai: str
    abu_dhabi: str
    sharjah: str
    burj_khalifa: str
    burj_khalifa_description: str
    dubai_mall: str
    dubai_mall_description: str
    palm_jumeirah: str
    palm_jumeirah_description: str
    no_title: str
    no_image_found: str
    empty_description: str
    favorite: str
    select_language: str
    switch_language: str

    def get(self, key: Union[str, StringKey]) -> str:
        """Look up by snake_case name, camelCase name or StringKey."""
        if isinstance(key, StringKey):
            return getattr(self, key.attr)
        if key in _FIELD_NAMES:
            return getattr(self, key)
        try:
            return getattr(self, StringKey(key).attr)
        except ValueError:
            raise KeyError(key) from None

    def keys(self) -> Tuple[str, ...]:
        return _FIELD_NAMES

    def as_dict(self, camel: bool = False) -> Dict[str, str]:
        d = asdict(self)
        if camel:
            return {k.value: d[k.attr] for k in StringKey}
        return d


_FIELD_NAMES: Tuple[str, ...] = tuple(f.name for f in fields(StringTable))


_TABLES: Dict[Locale, StringTable] = {
    Locale.EN: StringTable(
        app_title="Discover DXB",
        discover_button="Discover",
        home_page="Home Page",
        directory="Directory",
        english="English",
        arabic="العربية",
        discover_dxb_directory="Discover DXB Directory",
        dubai="Dubai",
        abu_dhabi="Abu Dhabi",
        sharjah="Sharjah",
        burj_khalifa="Burj Khalifa",
        burj_khalifa_description="The tallest building in the world located in Dubai.",
        dubai_mall="The Dubai Mall",
        dubai_mall_description="One of the largest shopping malls in the world.",
        palm_jumeirah="Palm Jumeirah",
        palm_jumeirah_description="A palm inside the sea, known for its luxury hotels and residences.",
        no_title="No Title",
        no_image_found="no image found",
        empty_description=" ",
        favorite="Favorite",
        select_language="Select Language",
        switch_language="Switch Language",
    ),
    Locale.AR: StringTable(
        app_title="اكتشف دبي",
        discover_button="اكتشف",
        home_page="الصفحة الرئيسية",
        directory="الدليل",
        english="English",
        arabic="العربية",
        discover_dxb_directory="دليل اكتشف دبي",
        dubai="دبي",
        abu_dhabi="أبو ظبي",
        sharjah="الشارقة",
        burj_khalifa="برج خليفة",
        burj_khalifa_description="أطول مبنى في العالم يقع في دبي.",
        dubai_mall="مول دبي",
        dubai_mall_description="أحد أكبر مراكز التسوق في العالم.",
        palm_jumeirah="نخلة جميرا",
        palm_jumeirah_description="نخلة في البحر، معروفة بفنادقها ومساكنها الفاخرة.",
        no_title="لا يوجد عنوان",
        no_image_found="لم يتم العثور على صورة",
        empty_description=" ",
        favorite="المفضلة",
        select_language="اختر اللغة",
        switch_language="تبديل اللغة",
    ),
}


def resolve(locale: Union[Locale, str]) -> StringTable:
    """Return the immutable string table for ``locale``.

    Raises ValueError for a code outside SUPPORTED_LOCALES.
    """
    return _TABLES[Locale(locale)]


_SUBTAG_SPLIT = re.compile(r"[-_.@]")


def _language_subtag(code: str) -> str:
    return _SUBTAG_SPLIT.split(code.strip(), maxsplit=1)[0].lower()


def _match(code: str) -> Optional[Locale]:
    subtag = _language_subtag(code)
    for loc in SUPPORTED_LOCALES:
        if loc.language_code == subtag:
            return loc
    return None


def is_supported(code: str) -> bool:
    """True when the language subtag of ``code`` ("ar-AE", "en_US.UTF-8") is renderable."""
    return _match(code) is not None


def negotiate(code: Optional[str], default: Locale = Locale.EN) -> Locale:
    match = _match(code) if code else None
    return match if match is not None else default


def language_toggle_label(locale: Union[Locale, str]) -> str:
    """Label of the language toggle: the name of the language it switches to."""
    table = resolve(locale)
    return table.arabic if Locale(locale) is Locale.EN else table.english
