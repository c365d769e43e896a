import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

REPO_ROOT = Path(__file__).resolve().parents[1]

# Load environment variables from .env file
load_dotenv(REPO_ROOT / ".env")


class Settings(BaseModel):
    db_path: str
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"
    draw_seed: Optional[str] = None


def get_settings() -> Settings:
    origins = os.getenv("TAROT_CORS_ORIGINS", "*")
    return Settings(
        db_path=os.getenv("TAROT_DB_PATH", str(REPO_ROOT / "data" / "sessions.db")),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        log_level=os.getenv("TAROT_LOG_LEVEL", "INFO").upper(),
        draw_seed=os.getenv("TAROT_DRAW_SEED") or None,
    )
