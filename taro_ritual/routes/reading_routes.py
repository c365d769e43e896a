"""FastAPI routes for the live reading and its session history."""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field

from ..interpret import daily_note, render_interpretation
from ..models import Reading, SessionRecord
from ..session_manager import SessionManager

router = APIRouter(tags=["reading"])


def get_manager(request: Request) -> SessionManager:
    return request.app.state.manager


class ReadingStartRequest(BaseModel):
    spread_id: Optional[str] = Field(None, description="Spread identifier; defaults to the selected spread")


class RevealRequest(BaseModel):
    index: int = Field(..., description="Position of the card within the reading")


class ActiveIndexRequest(BaseModel):
    index: int = Field(..., description="Requested active position; clamped to the card list")


def _reading_view(manager: SessionManager, reading: Optional[Reading]) -> Dict[str, Any]:
    if reading is None:
        return {"reading": None, "spread": None, "cards": [], "note": daily_note(None)}

    spread = manager.current_spread
    return {
        "reading": reading.model_dump(by_alias=True),
        "spread": spread.model_dump(by_alias=True) if spread else None,
        "cards": [
            render_interpretation(rc, manager.cards_by_id.get(rc.card_id))
            for rc in reading.cards
        ],
        "note": daily_note(reading.id),
    }


@router.post("/reading/start")
async def start_reading(req: ReadingStartRequest,
                        manager: SessionManager = Depends(get_manager)) -> Dict[str, Any]:
    reading = manager.start_reading(req.spread_id)
    if reading is None:
        raise HTTPException(status_code=503, detail="No spreads available")
    return _reading_view(manager, reading)


@router.get("/reading/current")
async def current_reading(manager: SessionManager = Depends(get_manager)) -> Dict[str, Any]:
    return _reading_view(manager, manager.current_reading)


@router.post("/reading/reveal")
async def reveal(req: RevealRequest, manager: SessionManager = Depends(get_manager)) -> Dict[str, Any]:
    return _reading_view(manager, manager.reveal_card(req.index))


@router.post("/reading/reveal-all")
async def reveal_everything(manager: SessionManager = Depends(get_manager)) -> Dict[str, Any]:
    return _reading_view(manager, manager.reveal_all())


@router.post("/reading/active")
async def set_active(req: ActiveIndexRequest,
                     manager: SessionManager = Depends(get_manager)) -> Dict[str, Any]:
    return _reading_view(manager, manager.set_active_index(req.index))


@router.get("/sessions")
async def list_sessions(count: Optional[int] = None,
                        manager: SessionManager = Depends(get_manager)) -> Dict[str, Any]:
    sessions: List[SessionRecord] = manager.filter_history(count)
    return {"sessions": [s.model_dump(by_alias=True) for s in sessions]}


@router.post("/sessions/{session_id}/load")
async def load_session(session_id: str, manager: SessionManager = Depends(get_manager)) -> Dict[str, Any]:
    reading = manager.load_session(session_id)
    if reading is None:
        raise HTTPException(status_code=404, detail=f"Session not found: {session_id}")
    return _reading_view(manager, reading)


@router.delete("/sessions")
async def clear_sessions(manager: SessionManager = Depends(get_manager)) -> Dict[str, Any]:
    await manager.clear_history()
    return {"ok": True, "remaining": len(manager.history)}
