"""Exception hierarchy raised by the syslog client.

The library is itself a logging transport, so none of these errors are logged
internally; every failure is surfaced to the caller.
"""

from __future__ import annotations


class SyslogError(Exception):
    """Base class for all errors raised by :mod:`lib_bsd_syslog`."""


class TransportNotConnectedError(SyslogError, ConnectionError):
    """The datagram socket could not be bound to the configured destination."""


class ClientClosedError(TransportNotConnectedError):
    """The client was closed; a closed client is never reopened."""


class InvalidMessageError(SyslogError, ValueError):
    """A syslog message was constructed from malformed field values."""


__all__ = [
    "ClientClosedError",
    "InvalidMessageError",
    "SyslogError",
    "TransportNotConnectedError",
]
