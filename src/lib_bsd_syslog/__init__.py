"""Public package surface of the RFC 3164 syslog client.

Typical use::

    from lib_bsd_syslog import Facility, Severity, SyslogClient, SyslogMessage

    with SyslogClient("logs.example", 514) as client:
        client.send(SyslogMessage(Facility.USER, Severity.ERROR, "disk full", "web01", "myapp", 4521))
"""

from __future__ import annotations

from .adapters import LocalClock, SocketState, SyslogClient, SyslogHandler
from .domain import (
    DEFAULT_PORT,
    ClientClosedError,
    Destination,
    Facility,
    InvalidMessageError,
    Severity,
    SyslogError,
    SyslogMessage,
    TransportNotConnectedError,
    format_timestamp,
    serialize,
)

__all__ = [
    "ClientClosedError",
    "DEFAULT_PORT",
    "Destination",
    "Facility",
    "InvalidMessageError",
    "LocalClock",
    "Severity",
    "SocketState",
    "SyslogClient",
    "SyslogError",
    "SyslogHandler",
    "SyslogMessage",
    "TransportNotConnectedError",
    "format_timestamp",
    "serialize",
]
