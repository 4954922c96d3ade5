"""Adapter implementations binding the syslog domain to the outside world."""

from __future__ import annotations

from .clock import LocalClock
from .logging_handler import SyslogHandler
from .udp_client import SocketState, SyslogClient

__all__ = ["LocalClock", "SocketState", "SyslogClient", "SyslogHandler"]
