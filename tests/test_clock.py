"""Tests for shrinkray.clock: today and the day-rollover check."""

import datetime
from unittest.mock import patch

from shrinkray.clock import sync_date, today
from shrinkray.game import Game
from shrinkray.storage import STORAGE_KEY


class _FixedDate(datetime.date):
    @classmethod
    def today(cls):
        return cls(2026, 3, 7)


class TestToday:
    def test_local_date_iso_format(self):
        with patch("shrinkray.clock.datetime.date", _FixedDate):
            assert today() == "2026-03-07"


class TestSyncDate:
    def test_same_day_is_noop(self, catalog, store):
        game = Game(catalog, store, "2026-10-14")
        for key in "PLANED":
            game.press(key)
        game.commit()
        before = store.get_item(STORAGE_KEY)

        assert sync_date(game, "2026-10-14") is False
        assert sync_date(game, "2026-10-14") is False
        assert game.state.total_attempts == 1
        assert store.get_item(STORAGE_KEY) == before

    def test_rollover_resets_mid_progress(self, catalog, store):
        game = Game(catalog, store, "2026-10-14")
        for key in "PLANET":
            game.press(key)
        game.press("ENTER")
        for key in "PLANK":
            game.press(key)
        game.press("ENTER")
        game.press("P")

        assert sync_date(game, "2026-10-15") is True
        assert game.date == "2026-10-15"
        assert game.start_word == "STAPLES"
        assert game.state.guesses == []
        assert game.state.total_attempts == 0
        assert game.buffer == ""
        assert '"date": "2026-10-15"' in store.get_item(STORAGE_KEY)

    def test_rollover_to_day_without_puzzle(self, catalog, store):
        game = Game(catalog, store, "2026-10-14")
        assert sync_date(game, "2030-01-01") is True
        assert game.puzzle is None
        assert game.is_input_locked
        assert store.get_item(STORAGE_KEY) is None

    def test_uses_today_by_default(self, catalog, store):
        game = Game(catalog, store, "2026-10-14")
        with patch("shrinkray.clock.today", return_value="2026-10-15"):
            assert sync_date(game) is True
        assert game.date == "2026-10-15"
