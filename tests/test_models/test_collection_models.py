"""Tests for the Game / Copy / Play / Collection pydantic models."""

from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from boardgame_stats.models.collection import Collection
from boardgame_stats.models.game import Copy, Game
from boardgame_stats.models.play import Play


class TestCopy:
    def test_blank_strings_become_none(self):
        copy = Copy.model_validate({"acquisitionDate": "  ", "pricePaid": ""})
        assert copy.acquisition_date is None
        assert copy.price_paid is None

    def test_defaults(self):
        copy = Copy()
        assert copy.status_owned is False
        assert copy.copy_id is None

    def test_frozen(self):
        copy = Copy(status_owned=True)
        with pytest.raises(ValidationError):
            copy.status_owned = False


class TestGame:
    def test_snake_and_camel_names_both_accepted(self):
        a = Game(id=1, name="Azul", is_base_game=True)
        b = Game.model_validate({"id": 1, "name": "Azul", "isBaseGame": True})
        assert a == b

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            Game(id=1, name="   ")

    def test_no_copies_by_default(self):
        assert Game(id=1, name="Azul").copies == []


class TestPlay:
    def test_valid_play(self):
        play = Play(game_id=1, date=date(2024, 3, 1), duration_min=45)
        assert play.year == 2024
        assert play.duration_estimated is False

    def test_iso_date_string(self):
        play = Play.model_validate({"gameId": 1, "date": "2024-03-01"})
        assert play.date == date(2024, 3, 1)

    def test_negative_duration_rejected(self):
        with pytest.raises(ValidationError):
            Play(game_id=1, date=date(2024, 3, 1), duration_min=-1)

    def test_zero_duration_allowed(self):
        assert Play(game_id=1, date=date(2024, 3, 1), duration_min=0).duration_min == 0


class TestCollection:
    def test_empty(self):
        collection = Collection()
        assert collection.games == []
        assert collection.plays == []
        assert collection.generated_at is None
