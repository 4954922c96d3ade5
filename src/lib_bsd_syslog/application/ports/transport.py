"""Ports describing the datagram transport boundary.

Purpose
-------
Keep the client and the logging bridge decoupled from :mod:`socket` so tests
and alternative transports can plug in behind narrow protocols.

Contents
--------
* :class:`DatagramSocketPort` - the subset of a socket object the client uses.
* :class:`SocketFactory` / :class:`Resolver` - callables producing sockets and
  resolving destinations.
* :class:`SyslogTransportPort` - anything that can send and close.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence, runtime_checkable

from lib_bsd_syslog.domain.message import SyslogMessage

AddrInfo = tuple[int, int, int, str, tuple[Any, ...]]


@runtime_checkable
class DatagramSocketPort(Protocol):
    """Connected datagram endpoint owned by exactly one client."""

    def connect(self, address: tuple[Any, ...]) -> None:
        """Associate the socket with a single remote endpoint."""

    def send(self, data: bytes) -> int:
        """Write ``data`` as one datagram to the connected endpoint."""

    def close(self) -> None:
        """Release the operating-system handle."""


@runtime_checkable
class SocketFactory(Protocol):
    def __call__(self, family: int, type: int) -> DatagramSocketPort: ...


@runtime_checkable
class Resolver(Protocol):
    """Resolve ``host``/``port`` into :func:`socket.getaddrinfo` style tuples."""

    def __call__(self, host: str, port: int) -> Sequence[AddrInfo]: ...


@runtime_checkable
class SyslogTransportPort(Protocol):
    """Deliver syslog messages to a collector."""

    def send(self, message: SyslogMessage) -> int:
        """Send ``message`` and return the number of bytes handed to the network stack."""

    def close(self) -> None:
        """Release transport resources."""


__all__ = ["AddrInfo", "DatagramSocketPort", "Resolver", "SocketFactory", "SyslogTransportPort"]
