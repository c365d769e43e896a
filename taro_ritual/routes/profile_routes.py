from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from .reading_routes import get_manager
from ..session_manager import SessionManager

router = APIRouter(prefix="/profile", tags=["profile"])


class BirthDateRequest(BaseModel):
    birth_date: str = Field("", description="YYYY-MM-DD, DD.MM.YYYY or DD/MM/YYYY (day first); empty clears")


@router.get("")
async def get_profile(manager: SessionManager = Depends(get_manager)) -> Dict[str, Any]:
    return manager.profile.model_dump(by_alias=True)


@router.put("")
async def set_birth_date(req: BirthDateRequest,
                         manager: SessionManager = Depends(get_manager)) -> Dict[str, Any]:
    profile = manager.set_birth_date(req.birth_date)
    if profile is None:
        raise HTTPException(status_code=400, detail=f"Invalid birth date: {req.birth_date}")
    return profile.model_dump(by_alias=True)
