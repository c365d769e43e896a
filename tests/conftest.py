import pytest

from taro_ritual.storage.sessions_db import SessionStore


@pytest.fixture
async def store(tmp_path):
    """A fresh on-disk session store."""
    s = SessionStore(tmp_path / "sessions.db")
    await s.init()
    return s
