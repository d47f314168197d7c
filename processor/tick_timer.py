"""Wall-clock pulse used to refresh time-dependent schedule state."""
from datetime import datetime, timezone
from typing import Callable, Optional

from snarfx import Observable


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TickTimer:
    """Emits the current time at a fixed interval."""

    def __init__(self, interval_seconds: int = 60, clock: Callable[[], datetime] = _utc_now):
        """
        Args:
            interval_seconds: Minimum spacing between ticks
            clock: Source of the current time
        """
        self.interval_seconds = interval_seconds
        self.clock = clock
        self.observable: Observable = Observable(None)

    def tick(self, now: Optional[datetime] = None) -> datetime:
        now = now if now is not None else self.clock()
        self.observable.set(now)
        return now

    def maybe_tick(self, now: Optional[datetime] = None) -> bool:
        """
        Tick only if the interval has elapsed since the last tick.

        Returns:
            True when a tick was emitted
        """
        now = now if now is not None else self.clock()
        last = self.observable.get()
        if last is not None and (now - last).total_seconds() < self.interval_seconds:
            return False
        self.tick(now)
        return True
