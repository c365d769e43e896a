"""Test doubles shared across test modules."""


class ScriptedRandom:
    """Random source that replays fixed values, for exact draw assertions."""

    def __init__(self, values):
        self.values = list(values)

    def random(self) -> float:
        return self.values.pop(0)


class FixedClock:
    def __init__(self, start: int = 1_000):
        self.value = start

    def __call__(self) -> int:
        self.value += 100
        return self.value


class RecordingNotifier:
    def __init__(self):
        self.kinds = []

    def notify(self, kind: str) -> None:
        self.kinds.append(kind)


class BrokenStore:
    """Store whose every operation fails, like an unavailable database."""

    async def init(self):
        raise OSError("disk unavailable")

    async def upsert(self, session):
        raise OSError("disk unavailable")

    async def list_sessions(self):
        raise OSError("disk unavailable")

    async def clear_sessions(self):
        raise OSError("disk unavailable")

    async def save_profile(self, profile):
        raise OSError("disk unavailable")

    async def load_profile(self):
        raise OSError("disk unavailable")
