"""
Locale store tests
==================

Default state, toggle parity, idempotent set, notification ordering and
listener isolation.

Run with: pytest tests/test_locale_store.py -v
"""

import logging
from unittest.mock import Mock

import pytest

from discover.i18n import Locale, resolve
from discover.locale_store import LocaleStore


class TestDefaults:
    def test_fresh_store_is_english(self):
        assert LocaleStore().get_locale() is Locale.EN

    def test_explicit_initial_locale(self):
        store = LocaleStore(Locale.AR)
        assert store.get_locale() is Locale.AR
        assert store.locale is Locale.AR

    def test_initial_code_string_is_coerced(self):
        assert LocaleStore("ar").get_locale() is Locale.AR

    def test_unsupported_initial_locale_rejected(self):
        with pytest.raises(ValueError):
            LocaleStore("fr")


class TestToggle:
    @pytest.mark.parametrize("n", range(0, 9))
    def test_toggle_parity(self, n):
        """n toggles from en land on en when n is even, ar when odd"""
        store = LocaleStore()
        for _ in range(n):
            store.toggle_locale()
        assert store.get_locale() is (Locale.EN if n % 2 == 0 else Locale.AR)

    def test_every_toggle_notifies_once(self):
        store = LocaleStore()
        listener = Mock()
        store.subscribe(listener)

        store.toggle_locale()
        store.toggle_locale()

        assert [c.args[0] for c in listener.call_args_list] == [Locale.AR, Locale.EN]


class TestSetLocale:
    def test_same_locale_does_not_notify(self):
        store = LocaleStore()
        listener = Mock()
        store.subscribe(listener)

        store.set_locale(Locale.EN)
        store.set_locale("en")

        listener.assert_not_called()
        assert store.get_locale() is Locale.EN

    def test_other_locale_notifies_exactly_once(self):
        store = LocaleStore()
        listener = Mock()
        store.subscribe(listener)

        store.set_locale(Locale.AR)

        listener.assert_called_once_with(Locale.AR)
        assert store.get_locale() is Locale.AR

    def test_unsupported_locale_leaves_state_untouched(self):
        store = LocaleStore()
        listener = Mock()
        store.subscribe(listener)

        with pytest.raises(ValueError):
            store.set_locale("de")

        assert store.get_locale() is Locale.EN
        listener.assert_not_called()


class TestSubscriptions:
    def test_registration_order(self):
        store = LocaleStore()
        calls = []
        store.subscribe(lambda loc: calls.append(("a", loc)))
        store.subscribe(lambda loc: calls.append(("b", loc)))
        store.subscribe(lambda loc: calls.append(("c", loc)))

        store.toggle_locale()

        assert calls == [("a", Locale.AR), ("b", Locale.AR), ("c", Locale.AR)]

    def test_state_committed_before_listeners_run(self):
        store = LocaleStore()
        seen = []
        store.subscribe(lambda _loc: seen.append(store.get_locale()))

        store.toggle_locale()

        assert seen == [Locale.AR]

    def test_unsubscribe_stops_notifications(self):
        store = LocaleStore()
        listener = Mock()
        sub = store.subscribe(listener)

        sub.unsubscribe()
        sub.unsubscribe()  # idempotent
        store.toggle_locale()

        listener.assert_not_called()
        assert not sub.active
        assert store.listener_count == 0

    def test_subscription_as_context_manager(self):
        store = LocaleStore()
        listener = Mock()
        with store.subscribe(listener):
            store.toggle_locale()
        store.toggle_locale()

        listener.assert_called_once_with(Locale.AR)

    def test_unsubscribe_during_round_keeps_in_flight_delivery(self):
        """A listener removed mid-round is still called in that round, not the next"""
        store = LocaleStore()
        late = Mock()
        subs = {}

        def first(_loc):
            subs["late"].unsubscribe()

        store.subscribe(first)
        subs["late"] = store.subscribe(late)

        store.toggle_locale()
        store.toggle_locale()

        late.assert_called_once_with(Locale.AR)

    def test_failing_listener_does_not_block_others(self, caplog):
        store = LocaleStore()
        after = Mock()

        def broken(_loc):
            raise RuntimeError("boom")

        store.subscribe(broken)
        store.subscribe(after)

        with caplog.at_level(logging.ERROR):
            store.toggle_locale()

        after.assert_called_once_with(Locale.AR)
        assert store.get_locale() is Locale.AR
        assert "boom" in caplog.text

    def test_non_callable_rejected(self):
        with pytest.raises(TypeError):
            LocaleStore().subscribe("not a function")


class TestEndToEnd:
    def test_toggle_and_resolve_scenario(self):
        store = LocaleStore()
        listener = Mock()
        store.subscribe(listener)

        store.toggle_locale()
        assert store.get_locale() is Locale.AR
        listener.assert_called_once_with(Locale.AR)
        assert resolve(store.get_locale()).discover_button == "اكتشف"

        store.toggle_locale()
        assert store.get_locale() is Locale.EN
        assert listener.call_count == 2
        assert resolve(store.get_locale()).discover_button == "Discover"
