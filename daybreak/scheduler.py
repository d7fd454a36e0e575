from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Set

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


@dataclass(order=True)
class ScheduledTimer:
    due_ms: float
    order: int
    token: int = field(compare=False)
    action: Callable[[], None] = field(compare=False)


class FrameScheduler:
    """
    Cooperative, single-threaded scheduler.

    Two kinds of work:
      - frame requests: run once, on the next call to run_frame(), with the
        frame timestamp (the "next display refresh").
      - timers: run once run_frame() is called with now >= due time.

    Every request returns an int token that can be cancelled. Work requested
    while a frame is running lands on the following frame, and a token
    cancelled mid-frame never runs even if it was part of that frame.
    """

    def __init__(self) -> None:
        self._next_token = 0
        self._order = 0
        self._frames: Dict[int, FrameCallback] = {}
        self._timers: List[ScheduledTimer] = []
        self._live_timers: Set[int] = set()
        self.now_ms = 0.0
        self.frame_count = 0

    # ------------------------------------------------------------------ #
    # Requests

    def _new_token(self) -> int:
        self._next_token += 1
        return self._next_token

    def request_frame(self, callback: FrameCallback) -> int:
        token = self._new_token()
        self._frames[token] = callback
        return token

    def call_later(self, delay_ms: float, action: Callable[[], None]) -> int:
        token = self._new_token()
        self._order += 1
        heapq.heappush(self._timers, ScheduledTimer(self.now_ms + delay_ms, self._order, token, action))
        self._live_timers.add(token)
        return token

    def cancel(self, token: int) -> bool:
        """Cancel a frame request or timer. Returns False if it already ran."""
        if self._frames.pop(token, None) is not None:
            return True
        if token in self._live_timers:
            self._live_timers.discard(token)
            return True
        return False

    def is_pending(self, token: int) -> bool:
        return token in self._frames or token in self._live_timers

    @property
    def pending_frames(self) -> int:
        return len(self._frames)

    @property
    def pending_timers(self) -> int:
        return len(self._live_timers)

    # ------------------------------------------------------------------ #
    # Driving

    def run_frame(self, now_ms: float) -> None:
        """Fire due timers, then every frame request made before this call."""
        self.now_ms = now_ms
        self.frame_count += 1

        while self._timers and self._timers[0].due_ms <= now_ms:
            item = heapq.heappop(self._timers)
            if item.token not in self._live_timers:
                continue
            self._live_timers.discard(item.token)
            item.action()

        batch = list(self._frames)
        for token in batch:
            callback = self._frames.pop(token, None)
            if callback is None:
                # cancelled earlier in this frame
                continue
            callback(now_ms)

    def clear(self) -> None:
        self._frames.clear()
        self._timers.clear()
        self._live_timers.clear()
