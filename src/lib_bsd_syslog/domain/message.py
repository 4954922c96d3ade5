"""Domain event describing one BSD syslog message and its wire encoding.

Purpose
-------
Provide an immutable representation of a single syslog event and the pure
serialization into the RFC 3164 datagram payload::

    <PRI>Mmm dd HH:MM:SS HOSTNAME TAG[PID]: TEXT

Contents
--------
* :class:`SyslogMessage` dataclass with validation and wire helpers.
* :func:`format_timestamp` - locale-independent RFC 3164 timestamp.
* :func:`serialize` - message to ASCII bytes using the local wall clock.

System Role
-----------
Sits in the domain layer; the UDP client adapter only ever sees the bytes
produced here, keeping the wire format in one place.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any

from .errors import InvalidMessageError
from .facility import Facility
from .severity import Severity

WIRE_ENCODING = "ascii"

# English abbreviations regardless of the process locale (strftime's %b is not).
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def format_timestamp(moment: datetime) -> str:
    """Render ``moment`` as ``Mmm dd HH:MM:SS`` in its own wall-clock time.

    The day of month is zero-padded, matching the deployed collectors this
    client talks to rather than the space padding shown in RFC 3164.

    Examples
    --------
    >>> format_timestamp(datetime(2025, 3, 7, 9, 5, 1))
    'Mar 07 09:05:01'
    >>> format_timestamp(datetime(2025, 12, 24, 23, 59, 59))
    'Dec 24 23:59:59'
    """

    return f"{_MONTHS[moment.month - 1]} {moment.day:02d} {moment:%H:%M:%S}"


def _coerce_member(value: Any, enum_type: type[Facility] | type[Severity], field_name: str) -> Any:
    """Return ``value`` as a member of ``enum_type`` or raise ``InvalidMessageError``."""
    if isinstance(value, enum_type):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return enum_type.from_numeric(value)
        except ValueError as exc:
            raise InvalidMessageError(f"{field_name} out of range: {value}") from exc
    raise InvalidMessageError(f"{field_name} must be a {enum_type.__name__}, got {type(value).__name__}")


@dataclass(slots=True, frozen=True)
class SyslogMessage:
    """Immutable syslog event ready to be serialized.

    Attributes
    ----------
    facility:
        :class:`Facility` that originated the event. Integers within range
        are accepted and converted.
    severity:
        :class:`Severity` of the event. Integers within range are accepted.
    text:
        Free text body; line breaks are neutralised on serialization.
    host_name:
        Originating machine name placed in the HOSTNAME field; must not
        contain CR or LF.
    tag:
        Program identifier placed in the TAG field; must not contain CR
        or LF.
    process_id:
        Optional process id appended to the tag as ``[pid]``.
    """

    facility: Facility
    severity: Severity
    text: str
    host_name: str
    tag: str
    process_id: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "facility", _coerce_member(self.facility, Facility, "facility"))
        object.__setattr__(self, "severity", _coerce_member(self.severity, Severity, "severity"))
        for name in ("text", "host_name", "tag"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise InvalidMessageError(f"{name} must be a string, got {type(value).__name__}")
        for name in ("host_name", "tag"):
            if any(char in getattr(self, name) for char in "\r\n"):
                raise InvalidMessageError(f"{name} must not contain line breaks")
        pid = self.process_id
        if pid is not None and (isinstance(pid, bool) or not isinstance(pid, int) or pid < 0):
            raise InvalidMessageError(f"process_id must be a non-negative integer or None, got {pid!r}")

    @property
    def priority(self) -> int:
        """Return the PRI value ``facility * 8 + severity`` (0..191)."""

        return self.facility.code * 8 + self.severity.code

    @property
    def tag_field(self) -> str:
        """Return the TAG field, suffixed with ``[pid]`` when a process id is set."""

        if self.process_id is None:
            return self.tag
        return f"{self.tag}[{self.process_id}]"

    @property
    def sanitized_text(self) -> str:
        """Return the text with every CRLF, CR and LF replaced by one space."""

        return self.text.replace("\r\n", " ").replace("\r", " ").replace("\n", " ")

    def to_string(self, *, timestamp: datetime) -> str:
        """Assemble the wire string for ``timestamp``.

        Examples
        --------
        >>> message = SyslogMessage(Facility.USER, Severity.ERROR, "disk\\nfull", "web01", "myapp", 4521)
        >>> message.to_string(timestamp=datetime(2025, 9, 3, 14, 2, 7))
        '<11>Sep 03 14:02:07 web01 myapp[4521]: disk full'
        """

        return f"<{self.priority}>{format_timestamp(timestamp)} {self.host_name} {self.tag_field}: {self.sanitized_text}"

    def to_bytes(self, *, timestamp: datetime) -> bytes:
        """Encode the wire string as ASCII; other characters become ``?``."""

        return self.to_string(timestamp=timestamp).encode(WIRE_ENCODING, errors="replace")

    def replace(self, **changes: Any) -> "SyslogMessage":
        """Return a copied, re-validated message with ``changes`` applied."""

        return replace(self, **changes)


def serialize(message: SyslogMessage, *, timestamp: datetime | None = None) -> bytes:
    """Return the datagram payload for ``message``.

    ``timestamp`` defaults to the local wall clock at the moment of the call.
    The payload carries no length prefix and no trailing newline.
    """

    moment = timestamp if timestamp is not None else datetime.now()
    return message.to_bytes(timestamp=moment)


__all__ = ["SyslogMessage", "WIRE_ENCODING", "format_timestamp", "serialize"]
