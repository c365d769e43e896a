"""The live reading session and its mirror in the session store.

One SessionManager is built at startup and handed to whoever drives the UI.
All state changes happen in memory first; each change then schedules a
background write to the store, and writes are applied in issue order. The
caller never waits for them. Store failures are logged and dropped, so
the in-memory state remains the source of truth for this process.
"""

from __future__ import annotations

import asyncio
import logging
import random
from datetime import datetime
from typing import Any, Callable, Coroutine, List, Optional, Sequence, Set

from . import catalog, deck as deck_module
from .interpret import session_summary
from .models import Card, Profile, Reading, Recommendation, SessionRecord, Spread
from .notifier import LoggingNotifier, Notifier
from .profile import build_profile
from .reading import reveal_all, reveal_card, set_active_index, start_reading
from .recommend import recommend
from .storage.sessions_db import SessionStore
from .utils.clock import now_ms
from .utils.rng import RandomSource, new_id

log = logging.getLogger("taro_ritual.session")


class SessionManager:
    def __init__(
        self,
        store: SessionStore,
        *,
        spreads: Optional[Sequence[Spread]] = None,
        deck: Optional[Sequence[Card]] = None,
        rng: Optional[RandomSource] = None,
        clock: Callable[[], int] = now_ms,
        id_factory: Callable[[str], str] = new_id,
        notifier: Optional[Notifier] = None,
    ) -> None:
        self.store = store
        self.spreads_all: List[Spread] = list(spreads if spreads is not None else catalog.list_spreads())
        self.spreads: List[Spread] = [s for s in self.spreads_all if not s.hidden]
        self.deck: List[Card] = list(deck if deck is not None else deck_module.list_deck())
        self.cards_by_id = {c.id: c for c in self.deck}
        self.rng: RandomSource = rng if rng is not None else random.Random()
        self.clock = clock
        self.id_factory = id_factory
        self.notifier: Notifier = notifier or LoggingNotifier()

        self.selected_spread_id: str = self.spreads[0].id if self.spreads else ""
        self.current_reading: Optional[Reading] = None
        self.history: List[SessionRecord] = []
        self.profile = Profile()
        self._pending: Set[asyncio.Task] = set()
        self._last_write: Optional["asyncio.Task[None]"] = None

    # -- reading lifecycle -------------------------------------------------

    @property
    def current_spread(self) -> Optional[Spread]:
        target = self.current_reading.spread_id if self.current_reading else self.selected_spread_id
        return catalog.find_spread(target, self.spreads_all)

    def select_spread(self, spread_id: str) -> Optional[Spread]:
        """Remember the spread to use when a reading starts without an id.

        Unknown ids leave the selection unchanged and return None.
        """
        spread = catalog.find_spread(spread_id, self.spreads_all)
        if spread is None:
            return None
        self.selected_spread_id = spread.id
        return spread

    def start_reading(self, spread_id: Optional[str] = None) -> Optional[Reading]:
        target = spread_id or self.selected_spread_id
        # Unknown ids fall back to the first spread on offer.
        pool = self.spreads_all if catalog.find_spread(target, self.spreads_all) else self.spreads
        if not pool:
            log.warning("start_reading: no spreads available")
            return None

        reading = start_reading(
            target, pool, self.deck,
            rng=self.rng, clock=self.clock, id_factory=self.id_factory,
        )
        self.selected_spread_id = reading.spread_id
        self.current_reading = reading
        log.info("reading started id=%s spread=%s", reading.id, reading.spread_id)
        self._persist_reading(reading)
        self.notifier.notify("soft")
        return reading

    def reveal_card(self, index: int) -> Optional[Reading]:
        reading = self.current_reading
        if reading is None:
            return None
        if reveal_card(reading, index):
            self._persist_reading(reading)
            self.notifier.notify("light")
        return reading

    def reveal_all(self) -> Optional[Reading]:
        reading = self.current_reading
        if reading is None:
            return None
        reveal_all(reading)
        self._persist_reading(reading)
        return reading

    def set_active_index(self, index: int) -> Optional[Reading]:
        reading = self.current_reading
        if reading is None:
            return None
        set_active_index(reading, index)
        self._persist_reading(reading)
        self.notifier.notify("medium")
        return reading

    def load_session(self, session_id: str) -> Optional[Reading]:
        """Resume a session from history; unknown ids leave the live reading alone."""
        for session in self.history:
            if session.id == session_id:
                reading = Reading.model_validate(session.model_dump(exclude={"summary"}))
                self.current_reading = reading
                self.selected_spread_id = reading.spread_id
                return reading
        return None

    # -- history ------------------------------------------------------------

    def filter_history(self, count: Optional[int] = None) -> List[SessionRecord]:
        if count is None:
            return list(self.history)
        return [s for s in self.history if len(s.cards) == count]

    async def refresh_history(self) -> List[SessionRecord]:
        await self.drain()
        try:
            self.history = await self.store.list_sessions()
        except Exception as e:
            log.warning("Could not load session history, keeping in-memory copy: %s", e)
        return self.history

    async def clear_history(self) -> None:
        # Queued snapshots must land before the clear.
        await self.drain()
        try:
            await self.store.clear_sessions()
        except Exception as e:
            log.warning("Could not clear session history: %s", e)
            return
        self.history = []

    def recommendation(self, now: Optional[datetime] = None) -> Recommendation:
        return recommend(self.spreads, self.history, now)

    # -- profile ------------------------------------------------------------

    async def load_profile(self) -> Profile:
        try:
            stored = await self.store.load_profile()
        except Exception as e:
            log.warning("Could not load profile: %s", e)
            return self.profile
        if stored is not None:
            self.profile = stored
        return self.profile

    def set_birth_date(self, text: str) -> Optional[Profile]:
        """Apply a birth-date input; None means the input was rejected."""
        profile = build_profile(text)
        if profile is None:
            log.info("birth date rejected: %r", text)
            return None
        self.profile = profile
        self._schedule(self.store.save_profile(profile.model_copy(deep=True)), "save profile")
        return profile

    # -- persistence --------------------------------------------------------

    def _persist_reading(self, reading: Reading) -> None:
        record = SessionRecord(
            **reading.model_dump(),
            summary=session_summary(reading, self.cards_by_id),
        )
        for i, existing in enumerate(self.history):
            if existing.id == record.id:
                self.history[i] = record
                break
        else:
            self.history.insert(0, record)
        self._schedule(self.store.upsert(record), f"upsert session {record.id}")

    def _schedule(self, op: Coroutine[Any, Any, None], what: str) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            log.warning("No running event loop; skipped %s", what)
            op.close()
            return
        task = loop.create_task(self._guard(op, what, self._last_write))
        self._last_write = task
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    @staticmethod
    async def _guard(op: Coroutine[Any, Any, None], what: str,
                     previous: Optional["asyncio.Task[None]"]) -> None:
        # Writes land in the order they were issued.
        if previous is not None and not previous.done():
            await asyncio.wait([previous])
        try:
            await op
        except Exception as e:
            log.warning("Persistence failed (%s); state kept in memory: %s", what, e)

    async def drain(self) -> None:
        """Wait for every write scheduled so far."""
        while self._pending:
            await asyncio.gather(*list(self._pending))
