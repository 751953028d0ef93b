"""
Game and copy models.

``Game`` is a cataloged title as produced by the ingestion collaborator.
Classification flags are mutually informing: an *expandalone* is a standalone
expansion and is reported separately from pure expansions and base games.

``Copy`` is one physical/digital instance of a game that is (or was) owned.
Ownership, acquisition date and price paid live on the copy, never on the
game, so a game with duplicate copies counts once per copy wherever BGG
entries are tallied.

Both models are frozen: the statistics engine treats the catalog as read-only.
Field names are snake_case; camelCase keys from the normalized ``data.json``
(``statusOwned``, ``acquisitionDate``, ``isBaseGame``...) validate through the
alias generator.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class Copy(BaseModel):
    """One owned (or formerly owned) instance of a game.

    Attributes:
        copy_id: Source UUID of the copy; ``None`` when the export had none.
        acquisition_date: Day the copy was acquired. ``None`` means "unknown
            date", a legitimate state surfaced by diagnostic views.
        status_owned: ``True`` while the copy is still in the collection.
        price_paid: Price paid in ``currency``; ``None`` when not recorded.
        currency: ISO currency code from the export, if any.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    copy_id: Optional[str] = None
    acquisition_date: Optional[date] = None
    status_owned: bool = False
    price_paid: Optional[float] = None
    currency: Optional[str] = None

    @field_validator("acquisition_date", "price_paid", mode="before")
    @classmethod
    def blank_is_missing(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class Game(BaseModel):
    """A cataloged board game title.

    Attributes:
        id: Stable identifier referenced by ``Play.game_id``.
        name: Display name.
        bgg_id: BoardGameGeek object ID, if known.
        year: Publication year, if known.
        is_base_game: Standalone playable game.
        is_expansion: Add-on content requiring a base game.
        is_expandalone: Expansion playable without its base game.
        copies: Ordered copy records; an empty list means never owned.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    name: str
    bgg_id: Optional[int] = None
    year: Optional[int] = None
    is_base_game: bool = False
    is_expansion: bool = False
    is_expandalone: bool = False
    copies: list[Copy] = []

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Game name must be non-empty.")
        return v
