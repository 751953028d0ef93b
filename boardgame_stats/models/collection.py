"""
Collection container: the catalog plus the play log, as handed over by ingestion.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from boardgame_stats.models.game import Game
from boardgame_stats.models.play import Play


class Collection(BaseModel):
    """All games and plays for one collector.

    Attributes:
        games: Catalog entries (base games, expansions, expandalones).
        plays: Play log; order is not significant to any statistic.
        generated_at: Timestamp of the export the data came from.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    games: list[Game] = []
    plays: list[Play] = []
    generated_at: Optional[datetime] = None
