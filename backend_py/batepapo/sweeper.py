"""Participant liveness sweeper.

Participants keep their session alive by calling ``POST /status``. The
sweeper wakes up every ``interval`` seconds, finds every participant
whose last heartbeat is older than ``timeout`` seconds, records one
"sai da sala..." status message per participant and then removes them.

The departure messages are committed before the participants are
deleted, so a client polling ``/messages`` never sees someone vanish
from the roster without the matching status message. A crash between
the two commits leaves a departure message for a participant who is
still listed. The next cycle picks that participant up again and records
a second "sai da sala..." message for them.
"""

from __future__ import annotations

import asyncio
import logging
import time
from contextlib import suppress
from typing import Callable, List, Optional

from sqlalchemy.orm import sessionmaker

from .models import BROADCAST, LEAVE_TEXT, Message, MessageType, Participant
from .validation import format_time

log = logging.getLogger("uvicorn.error")


class ParticipantSweeper:
    def __init__(
        self,
        session_factory: sessionmaker,
        interval: float = 15.0,
        timeout: float = 10.0,
        clock: Callable[[], float] = time.time,
    ):
        self.session_factory = session_factory
        self.interval = interval
        self.timeout = timeout
        self.clock = clock
        self._task: Optional[asyncio.Task] = None

    def sweep(self) -> List[str]:
        """Run one expire-and-announce cycle and return the evicted names."""
        now = self.clock()
        cutoff = now - self.timeout
        with self.session_factory() as db:
            expired = db.query(Participant).filter(Participant.last_status < cutoff).all()
            if not expired:
                return []

            names = [p.name for p in expired]
            stamp = format_time(now)
            db.add_all([
                Message(
                    from_=name,
                    to=BROADCAST,
                    text=LEAVE_TEXT,
                    type=MessageType.status,
                    time=stamp,
                )
                for name in names
            ])
            db.commit()

            # A heartbeat that arrived after the select keeps its participant.
            db.query(Participant).filter(
                Participant.id.in_([p.id for p in expired]),
                Participant.last_status < cutoff,
            ).delete(synchronize_session=False)
            db.commit()

        log.info("Sweeper removed %d inactive participant(s): %s", len(names), ", ".join(names))
        return names

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                await asyncio.to_thread(self.sweep)
            except Exception:
                log.exception("Participant sweep failed; retrying next cycle")

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the periodic sweep on the running event loop."""
        if self._task is None:
            self._task = asyncio.create_task(self._loop(), name="participant-sweeper")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with suppress(asyncio.CancelledError):
            await self._task
        self._task = None
