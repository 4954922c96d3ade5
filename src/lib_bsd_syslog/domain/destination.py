"""Remote collector address value object."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_PORT = 514


def validate_port(port: int) -> int:
    """Return ``port`` unchanged or raise ``ValueError`` when it is not a UDP port."""
    if isinstance(port, bool) or not isinstance(port, int):
        raise ValueError("port must be an integer")
    if port <= 0:
        raise ValueError("port must be positive")
    if port > 65535:
        raise ValueError("port must be <= 65535")
    return port


@dataclass(slots=True, frozen=True)
class Destination:
    """Host name or IP literal plus UDP port of a syslog collector."""

    host: str
    port: int = DEFAULT_PORT

    def __post_init__(self) -> None:
        if not isinstance(self.host, str) or not self.host.strip():
            raise ValueError("host must be a non-empty string")
        validate_port(self.port)

    @property
    def address(self) -> tuple[str, int]:
        """Return the ``(host, port)`` tuple accepted by :mod:`socket`."""

        return (self.host, self.port)

    @classmethod
    def parse(cls, value: str) -> "Destination":
        """Parse ``HOST[:PORT]``; IPv6 literals must be bracketed.

        Examples
        --------
        >>> Destination.parse("logs.example:1514")
        Destination(host='logs.example', port=1514)
        >>> Destination.parse("[::1]")
        Destination(host='::1', port=514)
        """

        raw = value.strip()
        if not raw:
            raise ValueError("expected HOST:PORT, got an empty value")
        if raw.startswith("["):
            host, sep, rest = raw[1:].partition("]")
            if not sep or (rest and not rest.startswith(":")):
                raise ValueError(f"expected [HOST]:PORT, got {value!r}")
            port_text = rest[1:] if rest else ""
        elif raw.count(":") > 1:
            raise ValueError(f"expected HOST:PORT (bracket IPv6 literals), got {value!r}")
        else:
            host, _, port_text = raw.partition(":")
        if not host:
            raise ValueError(f"expected HOST:PORT, got {value!r}")
        if not port_text:
            if raw.endswith(":"):
                raise ValueError(f"expected HOST:PORT, got {value!r}")
            return cls(host)
        try:
            port = int(port_text)
        except ValueError as exc:
            raise ValueError(f"port must be an integer, got {port_text!r}") from exc
        return cls(host, port)


__all__ = ["DEFAULT_PORT", "Destination", "validate_port"]
