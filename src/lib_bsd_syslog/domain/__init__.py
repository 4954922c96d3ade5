"""Domain entities and value objects of the syslog client."""

from __future__ import annotations

from .destination import DEFAULT_PORT, Destination
from .errors import ClientClosedError, InvalidMessageError, SyslogError, TransportNotConnectedError
from .facility import Facility
from .message import SyslogMessage, format_timestamp, serialize
from .severity import Severity

__all__ = [
    "ClientClosedError",
    "DEFAULT_PORT",
    "Destination",
    "Facility",
    "InvalidMessageError",
    "Severity",
    "SyslogError",
    "SyslogMessage",
    "TransportNotConnectedError",
    "format_timestamp",
    "serialize",
]
