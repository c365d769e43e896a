"""Spread catalog loader + helpers.

- Loads spread definitions from taro_ritual/data/spreads.json
- Provides: list_spreads(), available_spreads(), find_spread(spread_id)

Catalog problems surface as CatalogError on first load, never later.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from .models import Spread


DATA_PATH = Path(__file__).resolve().parent / "data" / "spreads.json"


class CatalogError(RuntimeError):
    pass


def _load_json(path: Path) -> Dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise CatalogError(f"Spread data file not found at: {path}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CatalogError(f"Invalid JSON in {path}: {e}") from e

    if "spreads" not in data or not isinstance(data["spreads"], list) or not data["spreads"]:
        raise CatalogError("Spread data must contain a non-empty 'spreads' list.")
    return data


def load_spreads(path: Path = DATA_PATH) -> List[Spread]:
    data = _load_json(path)
    try:
        spreads = [Spread.model_validate(item) for item in data["spreads"]]
    except ValidationError as e:
        raise CatalogError(f"Invalid spread definition in {path}: {e}") from e
    validate_spreads(spreads)
    return spreads


def validate_spreads(spreads: List[Spread]) -> None:
    ids = [s.id for s in spreads]
    if len(ids) != len(set(ids)):
        raise CatalogError("Duplicate spread ids detected.")
    for s in spreads:
        if len(s.positions) != s.count:
            raise CatalogError(
                f"Spread {s.id} declares {s.count} cards but has {len(s.positions)} positions"
            )


_SPREADS_CACHE: Optional[List[Spread]] = None


def list_spreads() -> List[Spread]:
    global _SPREADS_CACHE
    if _SPREADS_CACHE is None:
        _SPREADS_CACHE = load_spreads()
    return list(_SPREADS_CACHE)


def available_spreads() -> List[Spread]:
    """Spreads offered in the selector (hidden ones stay reachable by id)."""
    return [s for s in list_spreads() if not s.hidden]


def find_spread(spread_id: str, spreads: Optional[List[Spread]] = None) -> Optional[Spread]:
    for s in spreads if spreads is not None else list_spreads():
        if s.id == spread_id:
            return s
    return None
