"""Host notifier seam (haptics in the mobile shell)."""

import logging
from typing import Protocol

log = logging.getLogger("taro_ritual.notifier")


class Notifier(Protocol):
    def notify(self, kind: str) -> None: ...


class LoggingNotifier:
    """Default notifier when no host is attached: records the signal and moves on."""

    def notify(self, kind: str) -> None:
        log.debug("notify kind=%s", kind)
