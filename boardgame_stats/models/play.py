"""
Play session model.

A ``Play`` is one logged session of one game on one calendar day.  Several
plays may share a date (same-day replays); "sessions" deduplicate them.

Durations are guaranteed positive by the ingestion collaborator: a play with
no recorded time carries an imputed duration and ``duration_estimated=True``.
A zero duration is therefore treated as "no duration data" by the min / max /
median / average statistics, never as a real zero-length play.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class Play(BaseModel):
    """One logged play.

    Attributes:
        game_id: ``Game.id`` this play references.  Plays whose game is not in
            the catalog are ignored by every aggregation.
        date: Calendar day of the play.
        duration_min: Duration in minutes (actual or imputed).
        duration_estimated: ``True`` when ``duration_min`` was imputed.
        copy_id: Copy used, or ``None`` when played on someone else's copy.
        timestamp: Original play timestamp string from the export, if kept.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    game_id: int
    date: dt.date
    duration_min: float = 0.0
    duration_estimated: bool = False
    copy_id: Optional[str] = None
    timestamp: Optional[str] = None

    @field_validator("duration_min")
    @classmethod
    def validate_duration(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"duration_min must be >= 0, got {v}.")
        return v

    @property
    def year(self) -> int:
        return self.date.year
