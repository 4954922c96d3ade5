from __future__ import annotations

import socket
from datetime import datetime
from typing import Any, Callable, Iterator

import pytest

from lib_bsd_syslog.domain.facility import Facility
from lib_bsd_syslog.domain.message import SyslogMessage
from lib_bsd_syslog.domain.severity import Severity


class FixedClock:
    def __init__(self, moment: datetime) -> None:
        self.moment = moment
        self.calls = 0

    def now(self) -> datetime:
        self.calls += 1
        return self.moment


class FakeSocket:
    def __init__(self, family: int, type: int, *, connect_error: OSError | None = None) -> None:
        self.family = family
        self.type = type
        self.connect_error = connect_error
        self.send_error: OSError | None = None
        self.connected: list[tuple[Any, ...]] = []
        self.sent: list[bytes] = []
        self.close_calls = 0

    def connect(self, address: tuple[Any, ...]) -> None:
        if self.connect_error is not None:
            raise self.connect_error
        self.connected.append(address)

    def send(self, data: bytes) -> int:
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(data)
        return len(data)

    def close(self) -> None:
        self.close_calls += 1


class FakeSocketFactory:
    """Record every socket created; pop queued connect errors in order."""

    def __init__(self) -> None:
        self.created: list[FakeSocket] = []
        self.connect_errors: list[OSError | None] = []

    def __call__(self, family: int, type: int) -> FakeSocket:
        error = self.connect_errors.pop(0) if self.connect_errors else None
        sock = FakeSocket(family, type, connect_error=error)
        self.created.append(sock)
        return sock


def static_resolver(*addresses: tuple[str, int]) -> Callable[[str, int], list[tuple[Any, ...]]]:
    def resolve(host: str, port: int) -> list[tuple[Any, ...]]:
        targets = addresses or ((host, port),)
        return [(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP, "", target) for target in targets]

    return resolve


@pytest.fixture
def fixed_moment() -> datetime:
    return datetime(2025, 9, 3, 14, 2, 7)


@pytest.fixture
def fixed_clock(fixed_moment: datetime) -> FixedClock:
    return FixedClock(fixed_moment)


@pytest.fixture
def socket_factory() -> FakeSocketFactory:
    return FakeSocketFactory()


@pytest.fixture
def make_resolver() -> Callable[..., Callable[[str, int], list[tuple[Any, ...]]]]:
    return static_resolver


@pytest.fixture
def resolver() -> Callable[[str, int], list[tuple[Any, ...]]]:
    return static_resolver()


@pytest.fixture
def sample_message() -> SyslogMessage:
    return SyslogMessage(
        facility=Facility.USER,
        severity=Severity.ERROR,
        text="disk full",
        host_name="web01",
        tag="myapp",
        process_id=4521,
    )


class UdpReceiver:
    def __init__(self) -> None:
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self._sock.bind(("127.0.0.1", 0))
        self._sock.settimeout(2.0)
        self.port: int = self._sock.getsockname()[1]

    def receive(self) -> bytes:
        data, _ = self._sock.recvfrom(65535)
        return data

    def close(self) -> None:
        self._sock.close()


@pytest.fixture
def udp_receiver() -> Iterator[UdpReceiver]:
    receiver = UdpReceiver()
    try:
        yield receiver
    finally:
        receiver.close()
