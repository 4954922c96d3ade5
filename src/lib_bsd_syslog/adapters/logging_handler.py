"""Bridge from the stdlib :mod:`logging` module to a syslog transport.

Purpose
-------
Let applications keep using ``logging.getLogger(...)`` while records are sent
as RFC 3164 datagrams through a :class:`SyslogTransportPort`.

Contents
--------
* :class:`SyslogHandler` - :class:`logging.Handler` building one
  :class:`SyslogMessage` per record.

System Role
-----------
Optional adapter on top of :class:`lib_bsd_syslog.adapters.udp_client.SyslogClient`.
Transport failures follow the stdlib convention and are routed to
:meth:`logging.Handler.handleError`.
"""

from __future__ import annotations

import logging
import socket

from lib_bsd_syslog.application.ports.transport import SyslogTransportPort
from lib_bsd_syslog.domain.facility import Facility
from lib_bsd_syslog.domain.message import SyslogMessage
from lib_bsd_syslog.domain.severity import Severity


class SyslogHandler(logging.Handler):
    """Send every handled :class:`logging.LogRecord` as one syslog message."""

    def __init__(
        self,
        transport: SyslogTransportPort,
        *,
        facility: Facility = Facility.USER,
        tag: str | None = None,
        host_name: str | None = None,
        include_pid: bool = True,
        level: int = logging.NOTSET,
    ) -> None:
        """Bind the handler to ``transport``.

        Parameters
        ----------
        transport:
            Usually a :class:`SyslogClient`; closed together with the handler.
        facility:
            Facility stamped on every message.
        tag:
            Fixed TAG value; defaults to the record's logger name.
        host_name:
            HOSTNAME value; defaults to :func:`socket.gethostname`.
        include_pid:
            Append ``[pid]`` from :attr:`logging.LogRecord.process` to the tag.
        """
        super().__init__(level=level)
        self._transport = transport
        self._facility = facility
        self._tag = tag
        self._host_name = host_name if host_name is not None else socket.gethostname()
        self._include_pid = include_pid

    @property
    def transport(self) -> SyslogTransportPort:
        return self._transport

    def build_message(self, record: logging.LogRecord) -> SyslogMessage:
        """Translate ``record`` into a :class:`SyslogMessage`.

        Examples
        --------
        >>> record = logging.LogRecord("app.db", logging.ERROR, __file__, 1, "disk %s", ("full",), None)
        >>> record.process = 4521
        >>> handler = SyslogHandler(transport=None, host_name="web01")  # type: ignore[arg-type]
        >>> message = handler.build_message(record)
        >>> message.priority, message.tag_field, message.text
        (11, 'app.db[4521]', 'disk full')
        """
        process_id = record.process if self._include_pid else None
        return SyslogMessage(
            facility=self._facility,
            severity=Severity.from_python_level(record.levelno),
            text=self.format(record),
            host_name=self._host_name,
            tag=self._tag if self._tag is not None else record.name,
            process_id=process_id,
        )

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._transport.send(self.build_message(record))
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        """Close the transport, then detach the handler from :mod:`logging`."""
        self.acquire()
        try:
            self._transport.close()
        finally:
            self.release()
            super().close()


__all__ = ["SyslogHandler"]
