"""Distribution metadata shared by the CLI and packaging smoke tests."""

from __future__ import annotations

from typing import Callable

name = "lib_bsd_syslog"
title = "RFC 3164 (BSD syslog) client over UDP"
version = "0.1.0"
homepage = "https://github.com/lib-bsd-syslog/lib_bsd_syslog"
author = "lib_bsd_syslog contributors"
author_email = "maintainers@lib-bsd-syslog.invalid"
shell_command = "lib-bsd-syslog"


def print_info(writer: Callable[[str], None] | None = None) -> None:
    """Write the metadata banner through ``writer`` (defaults to :func:`print`)."""

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    text = "\n".join(lines) + "\n"
    if writer is None:
        print(text, end="")
    else:
        writer(text)


def summary_info() -> str:
    """Return the banner written by :func:`print_info` as one string.

    Examples
    --------
    >>> summary_info().startswith("Info for lib_bsd_syslog:")
    True
    """

    chunks: list[str] = []
    print_info(writer=chunks.append)
    return "".join(chunks)
