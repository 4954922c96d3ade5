"""Syslog facility enumeration carrying the RFC 3164 wire codes."""

from __future__ import annotations

from enum import Enum


class Facility(Enum):
    """Subsystem that originated a syslog event.

    Numeric values are part of the wire contract: they are multiplied by eight
    and added to the severity code to form the PRI field. Never renumber.
    """

    KERNEL = 0
    USER = 1
    MAIL = 2
    DAEMON = 3
    AUTH = 4
    SYSLOG = 5
    LPR = 6
    NEWS = 7
    UUCP = 8
    CRON = 9
    AUTHPRIV = 10
    FTP = 11
    NTP = 12
    LOG_AUDIT = 13
    LOG_ALERT = 14
    CLOCK = 15
    LOCAL0 = 16
    LOCAL1 = 17
    LOCAL2 = 18
    LOCAL3 = 19
    LOCAL4 = 20
    LOCAL5 = 21
    LOCAL6 = 22
    LOCAL7 = 23

    @property
    def code(self) -> int:
        """Return the numeric wire value."""

        return self.value

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @classmethod
    def from_name(cls, name: str) -> "Facility":
        """Resolve ``name`` case-insensitively.

        Examples
        --------
        >>> Facility.from_name("local3") is Facility.LOCAL3
        True
        >>> Facility.from_name("ftpd") is Facility.FTP
        True
        """

        normalized = name.strip().upper().replace("-", "_")
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown syslog facility: {name!r}") from exc

    @classmethod
    def from_numeric(cls, value: int) -> "Facility":
        try:
            return cls(value)
        except ValueError as exc:
            raise ValueError(f"Unsupported syslog facility numeric: {value}") from exc


# Facilities 4, 10, 13 and 14 are all used for security/audit messages and
# 9 and 15 both for clock daemons, depending on the operating system.
_DESCRIPTIONS = {
    Facility.KERNEL: "kernel messages",
    Facility.USER: "user-level messages",
    Facility.MAIL: "mail system",
    Facility.DAEMON: "system daemons",
    Facility.AUTH: "security/authorization messages",
    Facility.SYSLOG: "messages generated internally by syslogd",
    Facility.LPR: "line printer subsystem",
    Facility.NEWS: "network news subsystem",
    Facility.UUCP: "UUCP subsystem",
    Facility.CRON: "clock daemon",
    Facility.AUTHPRIV: "security/authorization messages",
    Facility.FTP: "FTP daemon",
    Facility.NTP: "NTP subsystem",
    Facility.LOG_AUDIT: "log audit",
    Facility.LOG_ALERT: "log alert",
    Facility.CLOCK: "clock daemon",
}
_DESCRIPTIONS.update({Facility[f"LOCAL{index}"]: f"local use {index} (local{index})" for index in range(8)})

_ALIASES = {
    "KERN": "KERNEL",
    "AUTH2": "AUTHPRIV",
    "SECURITY": "AUTH",
    "CRON2": "CLOCK",
    "FTPD": "FTP",
    "LOGAUDIT": "LOG_AUDIT",
    "AUDIT": "LOG_AUDIT",
    "LOGALERT": "LOG_ALERT",
}


__all__ = ["Facility"]
