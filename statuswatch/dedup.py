"""In-memory de-duplication of redelivered webhooks.

Jira delivers webhooks at least once, so the same change can arrive more
than once. The cache remembers the identities of recently handled events
for a retention window and a background task sweeps out stale entries.
State is per process and is lost on restart.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from typing import Callable, Dict

logger = logging.getLogger(__name__)

DEFAULT_RETENTION_SECONDS = 60.0
DEFAULT_SWEEP_INTERVAL_SECONDS = 30.0


class DedupCache:
    """Time-bounded record of processed event identities."""

    def __init__(
        self,
        retention_seconds: float = DEFAULT_RETENTION_SECONDS,
        sweep_interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if retention_seconds <= 0:
            raise ValueError("retention_seconds must be positive")
        if sweep_interval_seconds <= 0:
            raise ValueError("sweep_interval_seconds must be positive")

        self.retention_seconds = retention_seconds
        self.sweep_interval_seconds = sweep_interval_seconds
        self._clock = clock
        self._entries: Dict[str, float] = {}
        self._lock = threading.Lock()
        self.sweeper_task: asyncio.Task[None] | None = None

    def seen(self, event_id: str) -> bool:
        """Return True if the identity is recorded and not yet swept."""
        with self._lock:
            return event_id in self._entries

    def record(self, event_id: str) -> None:
        """Record the identity with the current time, replacing any entry."""
        with self._lock:
            self._entries[event_id] = self._clock()

    def discard(self, event_id: str) -> bool:
        """Forget an identity. Returns True if it was recorded."""
        with self._lock:
            return self._entries.pop(event_id, None) is not None

    def sweep(self) -> int:
        """Remove entries older than the retention window."""
        now = self._clock()
        with self._lock:
            expired = [
                key for key, recorded_at in self._entries.items()
                if now - recorded_at > self.retention_seconds
            ]
            for key in expired:
                del self._entries[key]

        if expired:
            logger.debug(f"Swept {len(expired)} expired webhook ids")
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, event_id: object) -> bool:
        return isinstance(event_id, str) and self.seen(event_id)

    def start(self) -> None:
        """Start the background sweep task on the running event loop."""

        if self.sweeper_task is None or self.sweeper_task.done():
            self.sweeper_task = asyncio.create_task(self._sweeper())
            logger.info(
                f"Dedup sweeper started (retention {self.retention_seconds}s, "
                f"interval {self.sweep_interval_seconds}s)"
            )

    async def stop(self) -> None:
        """Stop the background sweep task."""

        if self.sweeper_task is not None:
            self.sweeper_task.cancel()
            try:
                await self.sweeper_task
            except asyncio.CancelledError:
                pass
            self.sweeper_task = None
            logger.info("Dedup sweeper stopped")

    async def _sweeper(self) -> None:
        while True:
            await asyncio.sleep(self.sweep_interval_seconds)
            try:
                self.sweep()
            except Exception as e:
                logger.error(f"Error sweeping dedup cache: {e}")
