from __future__ import annotations

import logging
from typing import Callable

from ..core.constants import DEFAULT_POLL_INTERVAL_SECONDS, DEFAULT_PROGRESSIVE_TICK_SECONDS
from ..core.enums import RefreshReason

logger = logging.getLogger(__name__)

Listener = Callable[[RefreshReason], None]


class RecomputeTrigger:
    """Single invalidate-and-recompute hook.

    The host wires its poll timer, clock-in/out actions, cross-session
    broadcasts and the per-minute tick to ``invalidate``; views subscribe.
    The intervals are only advertised here, scheduling stays with the host.
    """

    def __init__(
        self,
        *,
        poll_interval_seconds: int = DEFAULT_POLL_INTERVAL_SECONDS,
        tick_interval_seconds: int = DEFAULT_PROGRESSIVE_TICK_SECONDS,
    ):
        self.poll_interval_seconds = int(poll_interval_seconds)
        self.tick_interval_seconds = int(tick_interval_seconds)
        self._listeners: list[Listener] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; the returned callable removes it again."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def invalidate(self, reason: RefreshReason = RefreshReason.POLL) -> int:
        """Notify every listener; returns how many handled it without error."""
        reason = RefreshReason(reason)
        handled = 0
        for listener in list(self._listeners):
            try:
                listener(reason)
            except Exception:
                logger.exception("Recompute listener failed on %s", reason.value)
                continue
            handled += 1
        logger.debug("Invalidated (%s): %d/%d listeners", reason.value, handled, len(self._listeners))
        return handled
