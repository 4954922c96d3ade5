from __future__ import annotations

import errno
import re
import socket
from typing import Any

import pytest

from lib_bsd_syslog.adapters.udp_client import SocketState, SyslogClient
from lib_bsd_syslog.domain.errors import ClientClosedError, SyslogError, TransportNotConnectedError
from lib_bsd_syslog.domain.facility import Facility
from lib_bsd_syslog.domain.message import SyslogMessage
from lib_bsd_syslog.domain.severity import Severity


@pytest.fixture
def client(socket_factory: Any, resolver: Any, fixed_clock: Any) -> SyslogClient:
    return SyslogClient(socket_factory=socket_factory, resolver=resolver, clock=fixed_clock)


def test_new_client_is_inactive_without_socket(client: SyslogClient, socket_factory: Any) -> None:
    assert client.state is SocketState.INACTIVE
    assert client.host is None
    assert client.port == 514
    assert client.destination is None
    assert socket_factory.created == []


def test_send_without_destination_fails_without_network_io(client: SyslogClient, socket_factory: Any, sample_message: SyslogMessage) -> None:
    with pytest.raises(TransportNotConnectedError, match="not connected"):
        client.send(sample_message)

    assert socket_factory.created == []
    assert client.state is SocketState.INACTIVE


def test_first_destination_wins_while_inactive(client: SyslogClient) -> None:
    assert client.set_destination("10.0.0.1", 1514) is True
    assert client.set_destination("10.0.0.2", 2514) is False
    client.host = "10.0.0.3"

    assert client.host == "10.0.0.1"
    assert client.port == 1514


def test_port_may_change_until_activation(client: SyslogClient, sample_message: SyslogMessage, socket_factory: Any) -> None:
    client.set_destination("10.0.0.1")
    client.port = 6514
    client.send(sample_message)
    client.port = 7514

    assert client.port == 6514
    assert socket_factory.created[0].connected == [("10.0.0.1", 6514)]


def test_destination_changes_after_activation_are_ignored(client: SyslogClient, sample_message: SyslogMessage, socket_factory: Any) -> None:
    client.set_destination("10.0.0.1")
    client.send(sample_message)

    assert client.set_destination("10.0.0.2") is False
    client.send(sample_message)

    assert client.host == "10.0.0.1"
    assert socket_factory.created[0].connected == [("10.0.0.1", 514)]


def test_set_destination_validates_arguments(client: SyslogClient) -> None:
    with pytest.raises(ValueError, match="must be positive"):
        client.set_destination("10.0.0.1", 0)
    with pytest.raises(ValueError, match="host"):
        client.set_destination("")

    assert client.host is None


def test_constructor_records_destination(socket_factory: Any, resolver: Any) -> None:
    client = SyslogClient("collector", 1514, socket_factory=socket_factory, resolver=resolver)

    assert client.destination is not None
    assert client.destination.address == ("collector", 1514)
    assert client.set_destination("other") is False


def test_first_send_activates_and_writes_one_datagram(client: SyslogClient, socket_factory: Any, sample_message: SyslogMessage) -> None:
    client.set_destination("10.0.0.1")

    sent = client.send(sample_message)

    assert client.state is SocketState.ACTIVE
    assert client.is_active is True
    [sock] = socket_factory.created
    assert sock.family == socket.AF_INET
    assert sock.type == socket.SOCK_DGRAM
    assert sock.sent == [b"<11>Sep 03 14:02:07 web01 myapp[4521]: disk full"]
    assert sent == len(sock.sent[0])


def test_repeated_sends_reuse_the_bound_socket(client: SyslogClient, socket_factory: Any, sample_message: SyslogMessage) -> None:
    client.set_destination("10.0.0.1")

    for _ in range(5):
        client.send(sample_message)

    assert len(socket_factory.created) == 1
    sock = socket_factory.created[0]
    assert len(sock.connected) == 1
    assert len(sock.sent) == 5


def test_each_send_reads_the_clock(client: SyslogClient, fixed_clock: Any, sample_message: SyslogMessage) -> None:
    client.set_destination("10.0.0.1")
    client.send(sample_message)
    client.send(sample_message)

    assert fixed_clock.calls == 2


def test_unresolvable_host_raises_not_connected(socket_factory: Any, fixed_clock: Any, sample_message: SyslogMessage) -> None:
    def failing_resolver(host: str, port: int) -> list[Any]:
        raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")

    client = SyslogClient("nowhere.invalid", socket_factory=socket_factory, resolver=failing_resolver, clock=fixed_clock)

    with pytest.raises(TransportNotConnectedError, match="cannot resolve nowhere.invalid:514") as excinfo:
        client.send(sample_message)

    assert isinstance(excinfo.value.__cause__, socket.gaierror)
    assert socket_factory.created == []
    assert client.state is SocketState.INACTIVE


@pytest.mark.parametrize("host", ["foo..bar", "a" * 64 + ".example"])
def test_host_rejected_by_idna_encoding_raises_not_connected(host: str, socket_factory: Any, sample_message: SyslogMessage) -> None:
    client = SyslogClient(host, socket_factory=socket_factory)

    with pytest.raises(TransportNotConnectedError, match="cannot resolve") as excinfo:
        client.send(sample_message)

    assert isinstance(excinfo.value.__cause__, UnicodeError)
    assert socket_factory.created == []
    assert client.state is SocketState.INACTIVE


def test_send_refuses_to_write_when_activation_left_no_socket(
    client: SyslogClient, socket_factory: Any, sample_message: SyslogMessage, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(client, "activate", lambda: None)

    with pytest.raises(TransportNotConnectedError, match="not connected"):
        client.send(sample_message)

    assert socket_factory.created == []


def test_empty_resolution_raises_not_connected(socket_factory: Any, sample_message: SyslogMessage) -> None:
    client = SyslogClient("empty", socket_factory=socket_factory, resolver=lambda host, port: [])

    with pytest.raises(TransportNotConnectedError, match="no address"):
        client.send(sample_message)


def test_refused_connect_closes_socket_and_stays_inactive(client: SyslogClient, socket_factory: Any, sample_message: SyslogMessage) -> None:
    socket_factory.connect_errors = [OSError(errno.EADDRNOTAVAIL, "Cannot assign requested address")]
    client.set_destination("10.0.0.1")

    with pytest.raises(TransportNotConnectedError, match="refused") as excinfo:
        client.send(sample_message)

    assert isinstance(excinfo.value.__cause__, OSError)
    [sock] = socket_factory.created
    assert sock.close_calls == 1
    assert sock.sent == []
    assert client.state is SocketState.INACTIVE


def test_activation_can_succeed_on_a_later_send(client: SyslogClient, socket_factory: Any, sample_message: SyslogMessage) -> None:
    socket_factory.connect_errors = [OSError(errno.ENETUNREACH, "Network is unreachable")]
    client.set_destination("10.0.0.1")

    with pytest.raises(TransportNotConnectedError):
        client.send(sample_message)
    client.send(sample_message)

    assert client.is_active
    assert [len(sock.sent) for sock in socket_factory.created] == [0, 1]


def test_activation_falls_back_to_next_resolved_address(
    socket_factory: Any, make_resolver: Any, fixed_clock: Any, sample_message: SyslogMessage
) -> None:
    socket_factory.connect_errors = [OSError(errno.EAFNOSUPPORT, "Address family not supported")]
    resolver = make_resolver(("192.0.2.1", 514), ("192.0.2.2", 514))
    client = SyslogClient("dual", socket_factory=socket_factory, resolver=resolver, clock=fixed_clock)

    client.send(sample_message)

    first, second = socket_factory.created
    assert first.close_calls == 1
    assert second.connected == [("192.0.2.2", 514)]
    assert len(second.sent) == 1


def test_write_errors_propagate_unchanged(client: SyslogClient, socket_factory: Any, sample_message: SyslogMessage) -> None:
    client.set_destination("10.0.0.1")
    client.activate()
    failure = OSError(errno.ENETUNREACH, "Network is unreachable")
    socket_factory.created[0].send_error = failure

    with pytest.raises(OSError) as excinfo:
        client.send(sample_message)

    assert excinfo.value is failure
    assert not isinstance(excinfo.value, SyslogError)
    assert client.is_active


def test_activate_is_idempotent(client: SyslogClient, socket_factory: Any) -> None:
    client.set_destination("10.0.0.1")
    client.activate()
    client.activate()

    assert len(socket_factory.created) == 1


def test_close_releases_socket_once_and_is_idempotent(client: SyslogClient, socket_factory: Any, sample_message: SyslogMessage) -> None:
    client.set_destination("10.0.0.1")
    client.send(sample_message)

    client.close()
    client.close()

    assert socket_factory.created[0].close_calls == 1
    assert client.state is SocketState.CLOSED
    assert client.is_closed


def test_send_after_close_fails_cleanly(client: SyslogClient, socket_factory: Any, sample_message: SyslogMessage) -> None:
    client.set_destination("10.0.0.1")
    client.send(sample_message)
    client.close()

    with pytest.raises(ClientClosedError, match="closed"):
        client.send(sample_message)

    assert len(socket_factory.created) == 1
    assert len(socket_factory.created[0].sent) == 1


def test_closed_error_is_a_not_connected_error() -> None:
    assert issubclass(ClientClosedError, TransportNotConnectedError)
    assert issubclass(TransportNotConnectedError, ConnectionError)


def test_closing_an_inactive_client_prevents_later_activation(client: SyslogClient, socket_factory: Any, sample_message: SyslogMessage) -> None:
    client.set_destination("10.0.0.1")
    client.close()

    with pytest.raises(ClientClosedError):
        client.send(sample_message)

    assert socket_factory.created == []
    assert client.set_destination("10.0.0.2") is False


def test_context_manager_releases_socket_on_error(socket_factory: Any, resolver: Any, sample_message: SyslogMessage) -> None:
    with pytest.raises(RuntimeError, match="caller failure"):
        with SyslogClient("10.0.0.1", socket_factory=socket_factory, resolver=resolver) as client:
            client.send(sample_message)
            raise RuntimeError("caller failure")

    assert client.is_closed
    assert socket_factory.created[0].close_calls == 1


def test_send_text_builds_message_with_local_hostname(
    client: SyslogClient, socket_factory: Any, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(socket, "gethostname", lambda: "box")
    client.set_destination("10.0.0.1")

    client.send_text("hello\nworld", severity=Severity.WARNING, facility=Facility.LOCAL1, tag="job", process_id=7)

    assert socket_factory.created[0].sent == [b"<140>Sep 03 14:02:07 box job[7]: hello world"]


def test_repr_mentions_destination_and_state(client: SyslogClient) -> None:
    client.set_destination("10.0.0.1")
    assert repr(client) == "SyslogClient(host='10.0.0.1', port=514, state=inactive)"


@pytest.mark.network
def test_datagram_reaches_loopback_collector(udp_receiver: Any, sample_message: SyslogMessage) -> None:
    with SyslogClient("127.0.0.1", udp_receiver.port) as client:
        client.send(sample_message)
        client.send(sample_message.replace(text="second"))

    first = udp_receiver.receive().decode("ascii")
    second = udp_receiver.receive().decode("ascii")

    pattern = r"<11>[A-Z][a-z]{2} \d{2} \d{2}:\d{2}:\d{2} web01 myapp\[4521\]: "
    assert re.fullmatch(pattern + "disk full", first)
    assert re.fullmatch(pattern + "second", second)


def test_default_socket_factory_creates_udp_socket(monkeypatch: pytest.MonkeyPatch, sample_message: SyslogMessage) -> None:
    created: list[tuple[Any, ...]] = []
    sent: list[bytes] = []

    class DummySocket:
        def __init__(self, *args: Any, **_kwargs: Any) -> None:
            created.append(args)

        def connect(self, address: tuple[Any, ...]) -> None:
            return None

        def send(self, data: bytes) -> int:
            sent.append(data)
            return len(data)

        def close(self) -> None:
            return None

    monkeypatch.setattr(socket, "socket", DummySocket)

    client = SyslogClient("127.0.0.1")
    client.send(sample_message)
    client.close()

    assert created == [(socket.AF_INET, socket.SOCK_DGRAM)]
    assert len(sent) == 1
