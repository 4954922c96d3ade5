"""Syslog severity enumeration carrying the RFC 3164 wire codes.

Purpose
-------
Represent the eight syslog severities as fixed-value members whose integers
are serialized directly into the PRI field of every datagram.

Contents
--------
* :class:`Severity` enum with lookup helpers and descriptions.
* ``_DESCRIPTIONS`` / ``_ALIASES`` tables backing those helpers.

System Role
-----------
Consumed by :class:`lib_bsd_syslog.domain.message.SyslogMessage` when computing
the priority and by the logging bridge when translating stdlib levels.
"""

from __future__ import annotations

import logging
from enum import Enum


class Severity(Enum):
    """Urgency of a syslog event, 0 (most severe) to 7 (least severe)."""

    EMERGENCY = 0
    ALERT = 1
    CRITICAL = 2
    ERROR = 3
    WARNING = 4
    NOTICE = 5
    INFORMATIONAL = 6
    DEBUG = 7

    @property
    def code(self) -> int:
        """Return the numeric wire value used in the PRI field."""

        return self.value

    @property
    def description(self) -> str:
        """Return the RFC 3164 description of the severity."""

        return _DESCRIPTIONS[self]

    @classmethod
    def from_name(cls, name: str) -> "Severity":
        """Resolve ``name`` case-insensitively, accepting common aliases.

        Examples
        --------
        >>> Severity.from_name("err") is Severity.ERROR
        True
        >>> Severity.from_name(" Warning ") is Severity.WARNING
        True
        """

        normalized = name.strip().upper()
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown syslog severity: {name!r}") from exc

    @classmethod
    def from_numeric(cls, value: int) -> "Severity":
        """Return the member whose wire code equals ``value``."""
        try:
            return cls(value)
        except ValueError as exc:
            raise ValueError(f"Unsupported syslog severity numeric: {value}") from exc

    @classmethod
    def from_python_level(cls, level: int) -> "Severity":
        """Translate a stdlib :mod:`logging` level into a severity.

        Non-standard levels snap down to the nearest standard level; values
        below ``DEBUG`` map to :attr:`DEBUG` and values above ``CRITICAL``
        to :attr:`CRITICAL`.

        Examples
        --------
        >>> Severity.from_python_level(logging.INFO) is Severity.INFORMATIONAL
        True
        >>> Severity.from_python_level(35) is Severity.WARNING
        True
        """

        for threshold, severity in _PYTHON_LEVELS:
            if level >= threshold:
                return severity
        return cls.DEBUG


_DESCRIPTIONS = {
    Severity.EMERGENCY: "system is unusable",
    Severity.ALERT: "action must be taken immediately",
    Severity.CRITICAL: "critical conditions",
    Severity.ERROR: "error conditions",
    Severity.WARNING: "warning conditions",
    Severity.NOTICE: "normal but significant condition",
    Severity.INFORMATIONAL: "informational messages",
    Severity.DEBUG: "debug-level messages",
}

_ALIASES = {
    "EMERG": "EMERGENCY",
    "PANIC": "EMERGENCY",
    "CRIT": "CRITICAL",
    "ERR": "ERROR",
    "WARN": "WARNING",
    "INFO": "INFORMATIONAL",
    "INFORMATION": "INFORMATIONAL",
}

# Highest threshold first; the first threshold the level reaches wins.
_PYTHON_LEVELS = (
    (logging.CRITICAL, Severity.CRITICAL),
    (logging.ERROR, Severity.ERROR),
    (logging.WARNING, Severity.WARNING),
    (logging.INFO, Severity.INFORMATIONAL),
)


__all__ = ["Severity"]
