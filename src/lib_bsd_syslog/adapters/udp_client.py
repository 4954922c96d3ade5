"""UDP transport sending RFC 3164 messages to a single collector.

Purpose
-------
Own one datagram socket, bind it lazily to a fixed destination on the first
send and write every serialized message as exactly one datagram.

Contents
--------
* :class:`SocketState` - explicit activation state owned by the client.
* :class:`SyslogClient` - concrete :class:`SyslogTransportPort`.

System Role
-----------
Outermost adapter of the library. Destination changes are silently ignored
once a host has been recorded or the socket is active ("first assignment wins
while inactive"); :meth:`SyslogClient.set_destination` returns ``False`` in that
case so callers can notice. The client is not thread-safe: share one instance
behind a lock or give every sender its own client.
"""

from __future__ import annotations

import socket
from enum import Enum
from typing import Sequence

from lib_bsd_syslog.adapters.clock import LocalClock
from lib_bsd_syslog.application.ports.time import ClockPort
from lib_bsd_syslog.application.ports.transport import (
    AddrInfo,
    DatagramSocketPort,
    Resolver,
    SocketFactory,
    SyslogTransportPort,
)
from lib_bsd_syslog.domain.destination import DEFAULT_PORT, Destination, validate_port
from lib_bsd_syslog.domain.errors import ClientClosedError, TransportNotConnectedError
from lib_bsd_syslog.domain.facility import Facility
from lib_bsd_syslog.domain.message import SyslogMessage
from lib_bsd_syslog.domain.severity import Severity


class SocketState(Enum):
    """Lifecycle of the client's socket; ``CLOSED`` is terminal."""

    INACTIVE = "inactive"
    ACTIVE = "active"
    CLOSED = "closed"


def _resolve_udp(host: str, port: int) -> Sequence[AddrInfo]:
    """Resolve ``host`` through the platform resolver for datagram sockets."""
    return socket.getaddrinfo(host, port, type=socket.SOCK_DGRAM)


class SyslogClient(SyslogTransportPort):
    """Send :class:`SyslogMessage` objects over UDP to one collector.

    Examples
    --------
    >>> client = SyslogClient()
    >>> client.set_destination("127.0.0.1")
    True
    >>> client.set_destination("10.0.0.9")
    False
    >>> client.host, client.port, client.state
    ('127.0.0.1', 514, <SocketState.INACTIVE: 'inactive'>)
    >>> client.close()
    >>> client.is_closed
    True
    """

    def __init__(
        self,
        host: str | None = None,
        port: int = DEFAULT_PORT,
        *,
        socket_factory: SocketFactory | None = None,
        resolver: Resolver | None = None,
        clock: ClockPort | None = None,
    ) -> None:
        """Create an inactive client; no socket exists until the first send."""
        self._host: str | None = None
        self._port = DEFAULT_PORT
        self._socket_factory = socket_factory or socket.socket
        self._resolver = resolver or _resolve_udp
        self._clock = clock or LocalClock()
        self._socket: DatagramSocketPort | None = None
        self._state = SocketState.INACTIVE
        if host is not None:
            self.set_destination(host, port)
        elif port != DEFAULT_PORT:
            self.port = port

    def __repr__(self) -> str:
        return f"SyslogClient(host={self._host!r}, port={self._port}, state={self._state.value})"

    def __enter__(self) -> "SyslogClient":
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.close()

    @property
    def host(self) -> str | None:
        """Host name or IP literal of the collector, ``None`` until set."""
        return self._host

    @host.setter
    def host(self, value: str) -> None:
        self.set_destination(value, self._port)

    @property
    def port(self) -> int:
        """UDP port of the collector (default 514)."""
        return self._port

    @port.setter
    def port(self, value: int) -> None:
        # A port assigned after activation would not affect the bound socket.
        if self._state is not SocketState.INACTIVE:
            return
        self._port = validate_port(value)

    @property
    def destination(self) -> Destination | None:
        if self._host is None:
            return None
        return Destination(self._host, self._port)

    @property
    def state(self) -> SocketState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state is SocketState.ACTIVE

    @property
    def is_closed(self) -> bool:
        return self._state is SocketState.CLOSED

    def set_destination(self, host: str, port: int = DEFAULT_PORT) -> bool:
        """Record the collector address if none is recorded and the socket is inactive.

        Returns
        -------
        bool
            ``True`` when the destination was recorded. ``False`` when the call
            was ignored because a host is already set or the client is no
            longer inactive; the earlier destination stays in effect.

        Raises
        ------
        ValueError
            When ``host`` is empty or ``port`` is outside ``1..65535``.
        """
        if self._state is not SocketState.INACTIVE or self._host is not None:
            return False
        destination = Destination(host, port)
        self._host = destination.host
        self._port = destination.port
        return True

    def activate(self) -> None:
        """Bind the socket to the recorded destination unless already active.

        Every resolved address is tried in order until ``connect`` succeeds.
        On failure no datagram is written, any socket created on the way is
        closed and the client stays inactive.

        Raises
        ------
        ClientClosedError
            When the client has been closed.
        TransportNotConnectedError
            When no destination is set, it cannot be resolved or no resolved
            address accepts the socket.
        """
        if self._state is SocketState.ACTIVE:
            return
        if self._state is SocketState.CLOSED:
            raise ClientClosedError("Syslog client is closed")
        if self._host is None:
            raise TransportNotConnectedError("Syslog client socket is not connected: no destination set")

        target = f"{self._host}:{self._port}"
        try:
            candidates = list(self._resolver(self._host, self._port))
        except (OSError, UnicodeError) as exc:
            raise TransportNotConnectedError(f"Syslog client socket is not connected: cannot resolve {target}") from exc
        if not candidates:
            raise TransportNotConnectedError(f"Syslog client socket is not connected: no address for {target}")

        last_error: OSError | None = None
        for family, _type, _proto, _canonname, sockaddr in candidates:
            sock: DatagramSocketPort | None = None
            try:
                sock = self._socket_factory(family, socket.SOCK_DGRAM)
                sock.connect(sockaddr)
            except OSError as exc:
                last_error = exc
                if sock is not None:
                    sock.close()
                continue
            self._socket = sock
            self._state = SocketState.ACTIVE
            return
        raise TransportNotConnectedError(f"Syslog client socket is not connected: {target} refused") from last_error

    def send(self, message: SyslogMessage) -> int:
        """Serialize ``message`` and write it as one datagram.

        Activates the socket on first use. Errors raised by the operating system
        during the write propagate unchanged; a returned count only means the
        bytes reached the local network stack.
        """
        self.activate()
        sock = self._socket
        if sock is None:
            raise TransportNotConnectedError("Syslog client socket is not connected")
        payload = message.to_bytes(timestamp=self._clock.now())
        return sock.send(payload)

    def send_text(
        self,
        text: str,
        *,
        severity: Severity = Severity.INFORMATIONAL,
        facility: Facility = Facility.USER,
        tag: str = "",
        host_name: str | None = None,
        process_id: int | None = None,
    ) -> int:
        """Build a :class:`SyslogMessage` from keyword fields and send it."""
        message = SyslogMessage(
            facility=facility,
            severity=severity,
            text=text,
            host_name=host_name if host_name is not None else socket.gethostname(),
            tag=tag,
            process_id=process_id,
        )
        return self.send(message)

    def close(self) -> None:
        """Release the socket and move to the terminal ``CLOSED`` state.

        Safe to call repeatedly. A closed client cannot be reactivated; later
        sends raise :class:`ClientClosedError`.
        """
        sock, self._socket = self._socket, None
        self._state = SocketState.CLOSED
        if sock is not None:
            sock.close()


__all__ = ["SocketState", "SyslogClient"]
