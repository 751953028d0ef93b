"""
Shared pytest fixtures for the boardgame stats test suite.

Provides:
  - ``make_game`` / ``make_play``: factories for catalog entries and plays
    with sensible defaults (owned base game, 60-minute play).
  - ``fake_rng``: factory for a deterministic ``RandomSource`` replaying a
    fixed sequence of draws.
  - ``sample_collection``: a small mixed collection used across modules.
"""

from __future__ import annotations

from datetime import date
from typing import Callable, Optional, Sequence

import pytest

from boardgame_stats.models.collection import Collection
from boardgame_stats.models.game import Copy, Game
from boardgame_stats.models.play import Play


class FakeRandom:
    """Replays ``values`` in order, cycling when exhausted."""

    def __init__(self, values: Sequence[float]) -> None:
        self._values = list(values) or [0.0]
        self._idx = 0
        self.calls = 0

    def random(self) -> float:
        value = self._values[self._idx % len(self._values)]
        self._idx += 1
        self.calls += 1
        return value


def _as_date(value: date | str) -> date:
    return value if isinstance(value, date) else date.fromisoformat(value)


# ── Factories ─────────────────────────────────────────────────────────────────

@pytest.fixture
def make_game() -> Callable[..., Game]:
    """Factory for ``Game``; one copy owned by default."""

    def _make(
        game_id: int,
        name: Optional[str] = None,
        *,
        owned: bool = True,
        base: bool = True,
        expansion: bool = False,
        expandalone: bool = False,
        acquired: Optional[date | str] = None,
        price: Optional[float] = 40.0,
        copies: Optional[list[Copy]] = None,
    ) -> Game:
        if copies is None:
            copies = [
                Copy(
                    copy_id=f"copy-{game_id}",
                    status_owned=owned,
                    acquisition_date=_as_date(acquired) if acquired else None,
                    price_paid=price,
                )
            ]
        return Game(
            id=game_id,
            name=name or f"Game {game_id}",
            is_base_game=base and not (expansion or expandalone),
            is_expansion=expansion,
            is_expandalone=expandalone,
            copies=copies,
        )

    return _make


@pytest.fixture
def make_play() -> Callable[..., Play]:
    """Factory for ``Play``; 60 minutes on the owner's copy by default."""

    def _make(
        game_id: int,
        day: date | str,
        minutes: float = 60.0,
        *,
        estimated: bool = False,
        copy_id: Optional[str] = "mine",
    ) -> Play:
        return Play(
            game_id=game_id,
            date=_as_date(day),
            duration_min=minutes,
            duration_estimated=estimated,
            copy_id=copy_id,
        )

    return _make


@pytest.fixture
def fake_rng() -> Callable[..., FakeRandom]:
    """Factory for a deterministic random source: ``fake_rng(0.0, 0.5)``."""

    def _make(*values: float) -> FakeRandom:
        return FakeRandom(values)

    return _make


# ── Sample collection ─────────────────────────────────────────────────────────

@pytest.fixture
def sample_collection(make_game, make_play) -> Collection:
    """Three base games, one expansion, and plays across 2023 and 2024.

    Game 1 ("Azul"):     6 plays on 5 days, 2023-2024.
    Game 2 ("Brass"):    2 long plays, 2024 only.
    Game 3 ("Cascadia"): owned, never played.
    Game 4 (expansion):  owned, 1 play.
    """
    games = [
        make_game(1, "Azul", acquired="2022-11-20"),
        make_game(2, "Brass", acquired="2024-01-02", price=None),
        make_game(3, "Cascadia", acquired="2024-03-10"),
        make_game(4, "Azul: Crystal Mosaic", expansion=True, acquired="2023-06-01"),
    ]
    plays = [
        make_play(1, "2023-03-01", 30),
        make_play(1, "2023-03-01", 30),
        make_play(1, "2023-07-15", 45),
        make_play(1, "2024-01-10", 40),
        make_play(2, "2024-01-10", 180),
        make_play(1, "2024-02-20", 35),
        make_play(2, "2024-05-05", 240, estimated=True),
        make_play(1, "2024-05-06", 30),
        make_play(4, "2024-05-06", 50),
    ]
    return Collection(games=games, plays=plays)
