"""SQLite storage for reading sessions and the user profile."""

import json
import os
from pathlib import Path
from typing import List, Optional, Union

import aiosqlite
from pydantic import ValidationError

from ..models import PROFILE_ID, Profile, SessionRecord

DB_PATH = os.path.join(os.path.dirname(__file__), "..", "..", "data", "sessions.db")


class SessionStoreError(RuntimeError):
    pass


class SessionStore:
    """Durable keyed store with a ``sessions`` and a singleton ``profile`` table.

    Every call opens its own connection, so writes for different ids never
    share state; writes for the same id replace each other (last write wins).
    Errors are raised as SessionStoreError; callers decide whether to swallow.
    """

    def __init__(self, db_path: Union[str, Path] = DB_PATH) -> None:
        self.db_path = str(db_path)

    async def init(self) -> None:
        """Create the tables if they do not exist yet."""
        try:
            if self.db_path != ":memory:":
                os.makedirs(os.path.dirname(os.path.abspath(self.db_path)), exist_ok=True)
            async with aiosqlite.connect(self.db_path) as conn:
                await conn.execute("""
                    CREATE TABLE IF NOT EXISTS sessions (
                        id TEXT PRIMARY KEY,
                        created_at INTEGER NOT NULL,
                        payload TEXT NOT NULL
                    )
                """)
                await conn.execute(
                    "CREATE INDEX IF NOT EXISTS idx_sessions_created_at ON sessions(created_at)"
                )
                await conn.execute("""
                    CREATE TABLE IF NOT EXISTS profile (
                        id TEXT PRIMARY KEY,
                        payload TEXT NOT NULL
                    )
                """)
                await conn.commit()
        except (aiosqlite.Error, OSError) as e:
            raise SessionStoreError(f"Cannot initialise session store at {self.db_path}: {e}") from e

    async def upsert(self, session: SessionRecord) -> None:
        payload = session.model_dump_json(by_alias=True)
        try:
            async with aiosqlite.connect(self.db_path) as conn:
                await conn.execute(
                    "INSERT OR REPLACE INTO sessions (id, created_at, payload) VALUES (?, ?, ?)",
                    (session.id, session.created_at, payload),
                )
                await conn.commit()
        except aiosqlite.Error as e:
            raise SessionStoreError(f"Cannot save session {session.id}: {e}") from e

    async def list_sessions(self) -> List[SessionRecord]:
        """All sessions, most recent first."""
        try:
            async with aiosqlite.connect(self.db_path) as conn:
                cursor = await conn.execute(
                    "SELECT payload FROM sessions ORDER BY created_at DESC"
                )
                rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            raise SessionStoreError(f"Cannot list sessions: {e}") from e

        return [self._decode_session(row[0]) for row in rows]

    async def get_session(self, session_id: str) -> Optional[SessionRecord]:
        try:
            async with aiosqlite.connect(self.db_path) as conn:
                cursor = await conn.execute(
                    "SELECT payload FROM sessions WHERE id = ?", (session_id,)
                )
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise SessionStoreError(f"Cannot load session {session_id}: {e}") from e

        if not row:
            return None
        return self._decode_session(row[0])

    async def clear_sessions(self) -> None:
        """Remove every session; the profile is left alone."""
        try:
            async with aiosqlite.connect(self.db_path) as conn:
                await conn.execute("DELETE FROM sessions")
                await conn.commit()
        except aiosqlite.Error as e:
            raise SessionStoreError(f"Cannot clear sessions: {e}") from e

    async def save_profile(self, profile: Profile) -> None:
        payload = profile.model_dump_json(by_alias=True)
        try:
            async with aiosqlite.connect(self.db_path) as conn:
                await conn.execute(
                    "INSERT OR REPLACE INTO profile (id, payload) VALUES (?, ?)",
                    (PROFILE_ID, payload),
                )
                await conn.commit()
        except aiosqlite.Error as e:
            raise SessionStoreError(f"Cannot save profile: {e}") from e

    async def load_profile(self) -> Optional[Profile]:
        try:
            async with aiosqlite.connect(self.db_path) as conn:
                cursor = await conn.execute(
                    "SELECT payload FROM profile WHERE id = ?", (PROFILE_ID,)
                )
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise SessionStoreError(f"Cannot load profile: {e}") from e

        if not row:
            return None
        try:
            return Profile.model_validate(json.loads(row[0]))
        except (json.JSONDecodeError, ValidationError) as e:
            raise SessionStoreError(f"Corrupt profile record: {e}") from e

    @staticmethod
    def _decode_session(payload: str) -> SessionRecord:
        try:
            return SessionRecord.model_validate(json.loads(payload))
        except (json.JSONDecodeError, ValidationError) as e:
            raise SessionStoreError(f"Corrupt session record: {e}") from e
