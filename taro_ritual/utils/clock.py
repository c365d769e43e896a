import time
from datetime import datetime
from typing import Optional


def now_ms() -> int:
    """Current wall-clock time as integer milliseconds since the epoch."""
    return int(time.time() * 1000)


def local_hour(now: Optional[datetime] = None) -> int:
    return (now or datetime.now()).hour
