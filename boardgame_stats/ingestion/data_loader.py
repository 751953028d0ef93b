"""
Loader for the normalized collection export (``data.json``).

Expected shape (camelCase keys, extra keys ignored)::

    {
      "games": [
        {"id": 1, "name": "Azul", "bggId": 230802, "isBaseGame": true,
         "copies": [{"copyId": "...", "statusOwned": true,
                     "acquisitionDate": "2023-05-01", "pricePaid": 39.99}]}
      ],
      "plays": [
        {"gameId": 1, "date": "2024-01-15", "durationMin": 45,
         "durationEstimated": false, "copyId": "..."}
      ],
      "generatedAt": "2024-02-01T20:15:00Z"
    }

Durations are already imputed upstream; this module does no cleaning beyond
what the pydantic models validate.  Plays referencing unknown games are kept
(the statistics engine ignores them) but reported once at WARNING level.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from boardgame_stats.models.collection import Collection

logger = logging.getLogger(__name__)


def load_collection(path: Path) -> Collection:
    """Read and validate a ``data.json`` export.

    Args:
        path: Path to the JSON file.

    Returns:
        Validated ``Collection``.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        pydantic.ValidationError: If any game or play fails validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    with open(path, encoding="utf-8") as f:
        raw = json.load(f)

    collection = Collection.model_validate(raw)
    logger.info(
        "Loaded %d games and %d plays from %s",
        len(collection.games), len(collection.plays), path,
    )

    known_ids = {g.id for g in collection.games}
    orphans = [p for p in collection.plays if p.game_id not in known_ids]
    if orphans:
        logger.warning(
            "%d plays reference %d unknown game ids; they will be ignored",
            len(orphans), len({p.game_id for p in orphans}),
        )
    return collection
