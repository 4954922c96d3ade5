"""Protocols separating the syslog domain from infrastructure adapters."""

from __future__ import annotations

from .time import ClockPort
from .transport import AddrInfo, DatagramSocketPort, Resolver, SocketFactory, SyslogTransportPort

__all__ = [
    "AddrInfo",
    "ClockPort",
    "DatagramSocketPort",
    "Resolver",
    "SocketFactory",
    "SyslogTransportPort",
]
