"""Background poller that hands service events to the main loop.

The worker thread never touches UI state; it only enqueues events. The main
loop drains the queue once per iteration and applies events in order.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from queue import Empty, Queue

from ..service.types import ServiceEvent

logger = logging.getLogger(__name__)


class EventPump:
    """Poll ``poll_events`` on a daemon thread every ``interval`` seconds."""

    def __init__(self, poll_events: Callable[[], list[ServiceEvent]], interval: float) -> None:
        self._poll_events = poll_events
        self._interval = max(0.01, interval)
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._results: Queue[ServiceEvent] = Queue()

    def _worker(self) -> None:
        while not self._stop.is_set():
            self.poll_once()
            self._stop.wait(self._interval)

    def poll_once(self) -> int:
        """Run one poll and enqueue its events; return how many were queued."""
        try:
            events = self._poll_events()
        except Exception:
            logger.exception("event poll failed")
            return 0
        for event in events:
            self._results.put(event)
        return len(events)

    def start(self) -> None:
        if self._thread is not None:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._worker,
            name="chanterm-event-pump",
            daemon=True,
        )
        self._thread.start()

    def stop(self, timeout: float = 1.0) -> None:
        self._stop.set()
        thread = self._thread
        self._thread = None
        if thread is not None:
            thread.join(timeout)

    def drain(self) -> list[ServiceEvent]:
        """Drain all queued events without blocking."""
        out: list[ServiceEvent] = []
        while True:
            try:
                out.append(self._results.get_nowait())
            except Empty:
                break
        return out


__all__ = ["EventPump"]
