from __future__ import annotations
import sys, platform

import lark

from simgo import __version__, __dev__


def version_line() -> str:
    suffix = "+dev" if __dev__ else ""
    return f"simgo {__version__}{suffix}"


def print_banner(stream=None) -> None:
    """Tool, interpreter and parser versions; bold/dim only on a TTY."""
    stream = stream or sys.stdout
    tty = getattr(stream, "isatty", lambda: False)()
    bold, dim, reset = ("\x1b[1m", "\x1b[2m", "\x1b[0m") if tty else ("", "", "")

    parser_ver = getattr(lark, "__version__", "unknown")
    print(f"{bold}{version_line()}{reset}  Go subset to SimplicityHL", file=stream)
    print(f"{dim}python {platform.python_version()}, lark {parser_ver}{reset}", file=stream)
