"""Screen reader announcement broadcaster.

Assistive technology only reads a live region when its text *changes*. Every
announcement is therefore cleared back to an empty string a short while after
it was made, so announcing the same sentence twice is still heard twice.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Dict, List, Optional, Union

from .logging_setup import get_logger
from .metrics import announcement_clears_total, announcements_total
from .types import Announcement, Priority


log = get_logger(__name__)

DEFAULT_CLEAR_DELAY = 1.0

Subscriber = Callable[[Priority, str], None]


class _Lane:
    __slots__ = ("text", "generation", "handle")

    def __init__(self) -> None:
        self.text = ""
        self.generation = 0
        self.handle: Optional[asyncio.TimerHandle] = None


class Announcer:
    """Two-lane (polite / assertive) live region state with auto-clear.

    One instance is created at application startup and handed to every
    component that needs to speak to the user.
    """

    def __init__(
        self,
        clear_delay: float = DEFAULT_CLEAR_DELAY,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self.clear_delay = clear_delay
        self._loop = loop
        self._lanes: Dict[Priority, _Lane] = {p: _Lane() for p in Priority}
        self._subscribers: List[Subscriber] = []
        self._closed = False

    def announce(self, text: str, priority: Union[Priority, str] = Priority.POLITE) -> None:
        """Publish ``text`` on the given lane and schedule it to clear."""
        if self._closed:
            log.warning("announce_after_close", text=text)
            return

        lane_key = self._resolve_priority(priority)
        lane = self._lanes[lane_key]

        # Supersede any pending clear on this lane
        if lane.handle is not None:
            lane.handle.cancel()
            lane.handle = None
        lane.generation += 1
        lane.text = text

        announcements_total.labels(priority=lane_key.value).inc()
        log.debug("announce", priority=lane_key.value, text=text)
        self._notify(lane_key, text)

        loop = self._get_loop()
        if loop is None:
            log.warning("announce_without_loop", priority=lane_key.value)
            return
        lane.handle = loop.call_later(self.clear_delay, self._clear, lane_key, lane.generation)

    def text(self, priority: Union[Priority, str] = Priority.POLITE) -> str:
        return self._lanes[self._resolve_priority(priority)].text

    def snapshot(self) -> Dict[str, str]:
        """Current text of both lanes, keyed by priority name."""
        return {p.value: lane.text for p, lane in self._lanes.items()}

    def current(self) -> List[Announcement]:
        """Non-empty lane contents as announcements."""
        return [
            Announcement(text=lane.text, priority=p)
            for p, lane in self._lanes.items()
            if lane.text
        ]

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a lane change listener; returns a function that removes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def close(self) -> None:
        """Cancel pending clears. The announcer is unusable afterwards."""
        for lane in self._lanes.values():
            if lane.handle is not None:
                lane.handle.cancel()
                lane.handle = None
            lane.generation += 1
        self._subscribers.clear()
        self._closed = True
        log.info("announcer_closed")

    def _clear(self, priority: Priority, generation: int) -> None:
        lane = self._lanes[priority]
        # A later announce() owns the lane now
        if generation != lane.generation:
            return
        lane.handle = None
        lane.text = ""
        announcement_clears_total.labels(priority=priority.value).inc()
        self._notify(priority, "")

    def _notify(self, priority: Priority, text: str) -> None:
        for callback in list(self._subscribers):
            try:
                callback(priority, text)
            except Exception as e:
                log.warning("subscriber_failed", priority=priority.value, error=str(e))

    def _get_loop(self) -> Optional[asyncio.AbstractEventLoop]:
        if self._loop is not None:
            return self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            return None

    @staticmethod
    def _resolve_priority(priority: Union[Priority, str]) -> Priority:
        try:
            return Priority(priority)
        except ValueError:
            log.warning("unknown_priority", priority=str(priority), fallback=Priority.POLITE.value)
            return Priority.POLITE
