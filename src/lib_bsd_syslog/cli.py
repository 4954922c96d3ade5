"""Click command line wrapping the syslog client.

Purpose
-------
Offer a small operator surface (``info``, ``codes``, ``send``) on top of the
library so collectors can be smoke-tested from a shell.

Contents
--------
* :func:`cli` - root command group with traceback and dotenv toggles.
* :func:`cli_info`, :func:`cli_codes`, :func:`cli_send` - subcommands.
* :func:`main` - entry point delegating to :func:`lib_cli_exit_tools.run_cli`.

System Role
-----------
Presentation layer only. Settings come from :mod:`lib_bsd_syslog.config`;
the datagram itself is sent by :class:`SyslogClient` inside a ``with`` block
so the socket is released on every exit path.
"""

from __future__ import annotations

import os
from typing import Sequence

import click
import lib_cli_exit_tools
from rich.console import Console
from rich.table import Table

from . import __init__conf__
from . import config as config_module
from .adapters.udp_client import SyslogClient
from .domain.destination import DEFAULT_PORT, Destination
from .domain.facility import Facility
from .domain.message import SyslogMessage
from .domain.severity import Severity

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=False,
    help=f"Load environment variables from a nearby .env (overrides {config_module.DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool) -> None:
    """Send RFC 3164 syslog messages over UDP."""

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback

    explicit: bool | None = None
    if ctx.get_parameter_source("use_dotenv") is not click.core.ParameterSource.DEFAULT:
        explicit = use_dotenv
    env_toggle = os.getenv(config_module.DOTENV_ENV_VAR)
    if config_module.should_use_dotenv(explicit=explicit, env_value=env_toggle):
        config_module.enable_dotenv()

    if ctx.invoked_subcommand is None:
        click.echo(__init__conf__.summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print project information."""

    click.echo(__init__conf__.summary_info(), nl=False)


@cli.command("codes", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_codes() -> None:
    """List facility and severity codes used in the PRI field."""

    console = Console(highlight=False)
    for title, members in (("Facilities", list(Facility)), ("Severities", list(Severity))):
        table = Table(title=title)
        table.add_column("code", justify="right")
        table.add_column("name")
        table.add_column("description")
        for member in members:
            table.add_row(str(member.code), member.name.lower(), member.description)
        console.print(table)


def _resolve_destination(host: str | None, port: int | None, configured: Destination | None) -> Destination:
    if host is not None:
        return Destination(host, port if port is not None else DEFAULT_PORT)
    if configured is None:
        raise click.UsageError(f"no destination: pass --host or set {config_module.ENDPOINT_ENV_VAR}")
    if port is not None:
        return Destination(configured.host, port)
    return configured


@cli.command("send", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("text")
@click.option("--host", default=None, help="Collector host name or IP (default: SYSLOG_ENDPOINT).")
@click.option("--port", type=click.IntRange(1, 65535), default=None, help="Collector UDP port (default 514).")
@click.option("--facility", default=None, help="Facility name or code (default: SYSLOG_FACILITY or user).")
@click.option("--severity", default=None, help="Severity name or code (default: SYSLOG_SEVERITY or notice).")
@click.option("--tag", default=None, help="TAG field (default: SYSLOG_TAG).")
@click.option("--hostname", "host_name", default=None, help="HOSTNAME field (default: SYSLOG_HOSTNAME or this machine).")
@click.option("--pid", "process_id", type=click.IntRange(min=0), default=None, help="Process id appended to the tag.")
def cli_send(
    text: str,
    host: str | None,
    port: int | None,
    facility: str | None,
    severity: str | None,
    tag: str | None,
    host_name: str | None,
    process_id: int | None,
) -> None:
    """Send TEXT as one syslog datagram."""

    try:
        settings = config_module.load_settings()
        destination = _resolve_destination(host, port, settings.destination)
        message = SyslogMessage(
            facility=settings.facility if facility is None else config_module.parse_code(facility, Facility, "--facility"),
            severity=settings.severity if severity is None else config_module.parse_code(severity, Severity, "--severity"),
            text=text,
            host_name=host_name if host_name is not None else settings.host_name,
            tag=tag if tag is not None else settings.tag,
            process_id=process_id,
        )
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc

    with SyslogClient(destination.host, destination.port) as client:
        sent = client.send(message)
    click.echo(f"sent {sent} bytes to {destination.host}:{destination.port}")


def main(argv: Sequence[str] | None = None, *, restore_traceback: bool = True) -> int:
    """Run the CLI through :func:`lib_cli_exit_tools.run_cli` and return its exit code.

    Traceback preferences changed by ``--traceback`` are restored afterwards
    unless ``restore_traceback`` is ``False``.
    """

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main"]
