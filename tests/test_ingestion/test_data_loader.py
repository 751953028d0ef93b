"""Tests for boardgame_stats.ingestion.data_loader."""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path

import pytest
from pydantic import ValidationError

from boardgame_stats.ingestion.data_loader import load_collection

_SAMPLE = {
    "games": [
        {
            "id": 1,
            "name": "Azul",
            "bggId": 230802,
            "year": 2017,
            "isBaseGame": True,
            "isExpansion": False,
            "isExpandalone": False,
            "playCount": 2,
            "copies": [
                {
                    "copyId": "uuid-1",
                    "statusOwned": True,
                    "acquisitionDate": "2023-05-01",
                    "pricePaid": 39.99,
                    "currency": "USD",
                }
            ],
        },
        {
            "id": 2,
            "name": "Unknown Origins",
            "isBaseGame": True,
            "copies": [{"copyId": "uuid-2", "statusOwned": True, "acquisitionDate": ""}],
        },
    ],
    "plays": [
        {"gameId": 1, "date": "2024-01-15", "durationMin": 45, "durationEstimated": False, "copyId": "uuid-1"},
        {"gameId": 1, "date": "2024-01-16", "durationMin": 30, "durationEstimated": True, "copyId": None},
    ],
    "generatedAt": "2024-02-01T20:15:00.000Z",
}


def _write(tmp_path, payload) -> Path:
    path = tmp_path / "data.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


class TestLoadCollection:
    def test_camel_case_keys_validate(self, tmp_path):
        collection = load_collection(_write(tmp_path, _SAMPLE))
        azul = collection.games[0]
        assert azul.bgg_id == 230802
        assert azul.is_base_game
        assert azul.copies[0].status_owned
        assert azul.copies[0].acquisition_date == date(2023, 5, 1)
        assert azul.copies[0].price_paid == pytest.approx(39.99)
        assert collection.plays[0].duration_min == 45
        assert collection.plays[1].duration_estimated
        assert collection.plays[1].copy_id is None
        assert collection.generated_at is not None

    def test_blank_acquisition_date_is_missing(self, tmp_path):
        collection = load_collection(_write(tmp_path, _SAMPLE))
        assert collection.games[1].copies[0].acquisition_date is None

    def test_logs_counts(self, tmp_path, caplog):
        with caplog.at_level(logging.INFO, logger="boardgame_stats.ingestion.data_loader"):
            load_collection(_write(tmp_path, _SAMPLE))
        assert "Loaded 2 games and 2 plays" in caplog.text

    def test_orphan_plays_warned_and_kept(self, tmp_path, caplog):
        payload = dict(_SAMPLE, plays=_SAMPLE["plays"] + [{"gameId": 99, "date": "2024-01-01", "durationMin": 10}])
        with caplog.at_level(logging.WARNING, logger="boardgame_stats.ingestion.data_loader"):
            collection = load_collection(_write(tmp_path, payload))
        assert len(collection.plays) == 3
        assert "1 plays reference 1 unknown game ids" in caplog.text

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_collection(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(json.JSONDecodeError):
            load_collection(path)

    def test_negative_duration_rejected(self, tmp_path):
        payload = dict(_SAMPLE, plays=[{"gameId": 1, "date": "2024-01-01", "durationMin": -5}])
        with pytest.raises(ValidationError):
            load_collection(_write(tmp_path, payload))

    def test_empty_export(self, tmp_path):
        collection = load_collection(_write(tmp_path, {}))
        assert collection.games == []
        assert collection.plays == []


def test_ingestion_package_imports() -> None:
    import boardgame_stats.ingestion as ingestion

    assert "load_collection" in ingestion.__doc__
