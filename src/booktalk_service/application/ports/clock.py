"""Time source for message timestamps and read receipts."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime:
        """Current time, timezone-aware UTC."""
        ...


class UtcClock:
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


utc_clock = UtcClock()
