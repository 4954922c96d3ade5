"""Environment-driven configuration for command-line and host-application use.

Purpose
-------
Collect the optional ``.env`` loading and ``SYSLOG_*`` environment parsing in
one module so the client itself never reads configuration.

Contents
--------
* :data:`DOTENV_ENV_VAR` - toggle enabling ``.env`` loading.
* :func:`should_use_dotenv` / :func:`enable_dotenv` - python-dotenv integration.
* :class:`SyslogSettings` / :func:`load_settings` - typed view of the
  environment.

Environment variables
---------------------
``SYSLOG_ENDPOINT``
    ``HOST[:PORT]`` of the collector; bracket IPv6 literals.
``SYSLOG_FACILITY`` / ``SYSLOG_SEVERITY``
    Names (``local0``, ``warning``) or numeric codes.
``SYSLOG_TAG`` / ``SYSLOG_HOSTNAME``
    TAG and HOSTNAME fields; default to the command name and the machine name.
"""

from __future__ import annotations

import os
import socket
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

from .domain.destination import Destination
from .domain.facility import Facility
from .domain.severity import Severity

DOTENV_ENV_VAR = "SYSLOG_USE_DOTENV"
ENDPOINT_ENV_VAR = "SYSLOG_ENDPOINT"
FACILITY_ENV_VAR = "SYSLOG_FACILITY"
SEVERITY_ENV_VAR = "SYSLOG_SEVERITY"
TAG_ENV_VAR = "SYSLOG_TAG"
HOSTNAME_ENV_VAR = "SYSLOG_HOSTNAME"

DEFAULT_TAG = "lib_bsd_syslog"

_TRUTHY = {"1", "true", "yes", "on"}
_LOADED_DOTENV: Path | None = None


def should_use_dotenv(*, explicit: bool | None, env_value: str | None) -> bool:
    """Decide whether ``.env`` loading is requested.

    An explicit CLI flag wins; otherwise the environment toggle is consulted.

    Examples
    --------
    >>> should_use_dotenv(explicit=None, env_value="yes")
    True
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    """

    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    return env_value.strip().lower() in _TRUTHY


def _find_dotenv(search_from: Path | None) -> Path | None:
    if search_from is None:
        found = find_dotenv(usecwd=True)
        return Path(found).resolve() if found else None
    start = search_from.resolve()
    for directory in (start, *start.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


def enable_dotenv(search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` walking upwards from ``search_from``.

    Without ``search_from`` the lookup starts in the working directory via
    :func:`dotenv.find_dotenv`.

    Existing environment variables keep precedence. Returns the resolved path
    of the loaded file or ``None`` when no file was found.
    """

    global _LOADED_DOTENV
    path = _find_dotenv(search_from)
    if path is None:
        return None
    load_dotenv(path, override=False)
    _LOADED_DOTENV = path
    return path


def loaded_dotenv() -> Path | None:
    """Return the ``.env`` path loaded by :func:`enable_dotenv`, if any."""

    return _LOADED_DOTENV


def _reset_dotenv_state_for_testing() -> None:
    global _LOADED_DOTENV
    _LOADED_DOTENV = None


@dataclass(slots=True, frozen=True)
class SyslogSettings:
    """Defaults gathered from the environment."""

    destination: Destination | None
    facility: Facility
    severity: Severity
    tag: str
    host_name: str


def parse_code(raw: str, enum_type: type[Facility] | type[Severity], label: str) -> Facility | Severity:
    """Resolve ``raw`` as a member name or numeric code of ``enum_type``.

    Errors are re-raised as ``ValueError`` prefixed with ``label``.
    """
    value = raw.strip()
    try:
        if value.isdigit():
            return enum_type.from_numeric(int(value))
        return enum_type.from_name(value)
    except ValueError as exc:
        raise ValueError(f"{label}: {exc}") from exc


def load_settings(environ: Mapping[str, str] | None = None) -> SyslogSettings:
    """Build :class:`SyslogSettings` from ``environ`` (defaults to :data:`os.environ`).

    Raises
    ------
    ValueError
        When a variable is present but malformed; the message names it.

    Examples
    --------
    >>> settings = load_settings({"SYSLOG_ENDPOINT": "logs:1514", "SYSLOG_FACILITY": "local4", "SYSLOG_HOSTNAME": "web01"})
    >>> settings.destination.port, settings.facility.code, settings.host_name
    (1514, 20, 'web01')
    """

    env = os.environ if environ is None else environ

    destination: Destination | None = None
    endpoint = env.get(ENDPOINT_ENV_VAR, "").strip()
    if endpoint:
        try:
            destination = Destination.parse(endpoint)
        except ValueError as exc:
            raise ValueError(f"{ENDPOINT_ENV_VAR}: {exc}") from exc

    facility = Facility.USER
    if env.get(FACILITY_ENV_VAR, "").strip():
        facility = parse_code(env[FACILITY_ENV_VAR], Facility, FACILITY_ENV_VAR)

    severity = Severity.NOTICE
    if env.get(SEVERITY_ENV_VAR, "").strip():
        severity = parse_code(env[SEVERITY_ENV_VAR], Severity, SEVERITY_ENV_VAR)

    tag = env.get(TAG_ENV_VAR, "").strip() or DEFAULT_TAG
    host_name = env.get(HOSTNAME_ENV_VAR, "").strip() or socket.gethostname()

    return SyslogSettings(
        destination=destination,
        facility=facility,  # type: ignore[arg-type]
        severity=severity,  # type: ignore[arg-type]
        tag=tag,
        host_name=host_name,
    )


__all__ = [
    "DEFAULT_TAG",
    "DOTENV_ENV_VAR",
    "ENDPOINT_ENV_VAR",
    "FACILITY_ENV_VAR",
    "HOSTNAME_ENV_VAR",
    "SEVERITY_ENV_VAR",
    "SyslogSettings",
    "TAG_ENV_VAR",
    "enable_dotenv",
    "load_settings",
    "loaded_dotenv",
    "parse_code",
    "should_use_dotenv",
]
