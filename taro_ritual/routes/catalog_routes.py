"""FastAPI routes for static reference data and suggestions.

Endpoints:
- GET /spreads
- PUT /spreads/selected
- GET /deck
- GET /deck/{card_id}
- GET /recommendation
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from .reading_routes import get_manager
from ..session_manager import SessionManager

router = APIRouter(tags=["catalog"])


@router.get("/spreads")
async def spreads(include_hidden: bool = Query(False, alias="all"),
                  manager: SessionManager = Depends(get_manager)) -> Dict[str, Any]:
    items = manager.spreads_all if include_hidden else manager.spreads
    return {
        "selected": manager.selected_spread_id,
        "spreads": [s.model_dump(by_alias=True) for s in items],
    }


class SelectSpreadRequest(BaseModel):
    spread_id: str = Field(..., description="Spread used by the next reading started without an id")


@router.put("/spreads/selected")
async def select_spread(req: SelectSpreadRequest,
                        manager: SessionManager = Depends(get_manager)) -> Dict[str, Any]:
    spread = manager.select_spread(req.spread_id)
    if spread is None:
        raise HTTPException(status_code=404, detail=f"Unknown spread_id: {req.spread_id}")
    return {"selected": spread.id, "spread": spread.model_dump(by_alias=True)}


@router.get("/deck")
async def deck(manager: SessionManager = Depends(get_manager)) -> Dict[str, Any]:
    return {
        "card_count": len(manager.deck),
        "cards": [c.model_dump(by_alias=True) for c in manager.deck],
    }


@router.get("/deck/{card_id}")
async def card(card_id: str, manager: SessionManager = Depends(get_manager)) -> Dict[str, Any]:
    c = manager.cards_by_id.get(card_id)
    if not c:
        raise HTTPException(status_code=404, detail=f"Unknown card_id: {card_id}")
    return {"card": c.model_dump(by_alias=True)}


@router.get("/recommendation")
async def recommendation(manager: SessionManager = Depends(get_manager)) -> Dict[str, Any]:
    return manager.recommendation().model_dump(by_alias=True)
