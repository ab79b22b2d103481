"""Frame clock: turns frame timestamps into clamped deltas."""

from typing import Optional

from ecosim.config.display import MAX_FRAME_DELTA_MS


class FrameClock:
    """Tracks the previous frame time and hands out elapsed milliseconds.

    Deltas are clamped to ``max_delta_ms`` so a stalled frame or a long
    pause never forces the simulation to catch up in one step.
    """

    def __init__(self, max_delta_ms: float = MAX_FRAME_DELTA_MS) -> None:
        self.max_delta_ms = max_delta_ms
        self.last_time: Optional[float] = None

    def advance(self, now: float) -> float:
        """Record ``now`` and return the clamped delta since the last call.

        The first call after construction or ``reset`` returns 0.
        """
        if self.last_time is None:
            delta = 0.0
        else:
            delta = min(max(0.0, now - self.last_time), self.max_delta_ms)
        self.last_time = now
        return delta

    def reset(self) -> None:
        """Forget the previous frame (call when resuming from a pause)."""
        self.last_time = None
