"""Clock adapter returning the local wall-clock time."""

from __future__ import annotations

from datetime import datetime

from lib_bsd_syslog.application.ports.time import ClockPort


class LocalClock(ClockPort):
    """Concrete clock port returning naive local timestamps.

    RFC 3164 timestamps carry no zone, so the local wall clock is rendered as is.
    """

    def now(self) -> datetime:
        return datetime.now()


__all__ = ["LocalClock"]
