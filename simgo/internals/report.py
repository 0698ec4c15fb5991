# internals/report.py
"""Diagnostic collection and rendering.

Every stage reports through one Reporter; nothing is printed until the driver
calls Reporter.print(). Rendering has three modes:

    plain    file:3:5: error [SG2005]: slices are not supported, use fixed-size arrays.
    ascii    plain header, then the source line and a caret
    unicode  boxed header with a marker under the offending column
"""
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, List, Optional

from lark import Token

_RESET = "\x1b[0m"
_BOLD = "\x1b[1m"
_DIM = "\x1b[2m"
_RED = "\x1b[31m"
_YELLOW = "\x1b[33m"
_CYAN = "\x1b[36m"
_GRAY = "\x1b[90m"


@dataclass(frozen=True)
class Span:
    """1-based source range."""
    line: int
    col: int
    end_line: int
    end_col: int


@dataclass
class Diagnostic:
    kind: str                        # "error" | "warning"
    code: str
    message: str
    span: Optional[Span] = None

    @property
    def is_error(self) -> bool:
        return self.kind == "error"


def span_of(t: Any) -> Optional[Span]:
    """Source span of a lark Tree (via meta) or Token, or None."""
    if isinstance(t, Token):
        if t.line is None or t.column is None:
            return None
        return Span(t.line, t.column, t.end_line or t.line, t.end_column or t.column)

    meta = getattr(t, "meta", None)
    if meta is None or getattr(meta, "empty", True):
        return None
    return Span(meta.line, meta.column, meta.end_line, meta.end_column)


class Reporter:
    """Collects diagnostics for one source file."""

    def __init__(self, source: Optional[str] = None, filename: str = "<input>") -> None:
        self.source = source
        self.filename = filename
        self.items: List[Diagnostic] = []

    def error(self, code: str, msg: str, span: Optional[Span]) -> None:
        self.items.append(Diagnostic("error", code, msg, span))

    def warn(self, code: str, msg: str, span: Optional[Span]) -> None:
        self.items.append(Diagnostic("warning", code, msg, span))

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.items if d.is_error]

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.items if not d.is_error]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def error_messages(self) -> List[str]:
        """Plain error texts in emission order (no location, no code)."""
        return [d.message for d in self.errors]

    # --- Rendering

    def format(self, use_color: bool = True, use_unicode: bool = True) -> str:
        lines = self.source.splitlines() if self.source else None
        name = self._display_name()
        out: List[str] = []
        for d in self.items:
            out.extend(self._render(d, name, lines, use_color, use_unicode))
        return "\n".join(out)

    def print(self, stream=None, use_color: Optional[bool] = None, use_unicode: Optional[bool] = None) -> None:
        """Print diagnostics to `stream` (default: sys.stderr).

        Color and box drawing are only used on a TTY; NO_COLOR, NO_UNICODE
        and TERM=dumb switch them off.
        """
        import os
        import sys

        stream = stream or sys.stderr
        fancy = getattr(stream, "isatty", lambda: False)() and os.getenv("TERM") != "dumb"
        if use_color is None:
            use_color = fancy and os.getenv("NO_COLOR") is None
        if use_unicode is None:
            use_unicode = fancy and os.getenv("NO_UNICODE") is None

        text = self.format(use_color=use_color, use_unicode=use_unicode)
        if text:
            print(text, file=stream)

    def _display_name(self) -> str:
        # ./relative/path when under cwd, bare name otherwise
        if self.filename.startswith("<"):
            return self.filename
        try:
            return f"./{Path(self.filename).resolve().relative_to(Path.cwd())}"
        except ValueError:
            return Path(self.filename).name

    @staticmethod
    def _render(d: Diagnostic, name: str, src_lines: Optional[List[str]],
                use_color: bool, use_unicode: bool) -> Iterator[str]:
        where = f"{name}:{d.span.line}:{d.span.col}" if d.span else name
        text = d.message if d.message.endswith(".") else f"{d.message}."
        accent = _RED if d.is_error else _YELLOW

        if use_color:
            head = f"{_CYAN}{where}{_RESET}: {_BOLD}{accent}{d.kind}{_RESET} [{_DIM}{d.code}{_RESET}]: {text}"
        else:
            head = f"{where}: {d.kind} [{d.code}]: {text}"

        if d.span is None or src_lines is None:
            yield head
            return

        idx = d.span.line - 1
        source_line = src_lines[idx] if 0 <= idx < len(src_lines) else ""
        pad = " " * (max(1, d.span.col) - 1)

        if not use_unicode:
            yield head
            yield f"  | {source_line}"
            yield f"  ` {pad}^"
            return

        gray = (lambda s: f"{_GRAY}{s}{_RESET}") if use_color else (lambda s: s)
        mark = (lambda s: f"{accent}{s}{_RESET}") if use_color else (lambda s: s)
        yield f"{gray('  ╭──┤ ')}{head}"
        yield f"{gray('  │')}  {source_line}"
        yield f"{gray('  │')}  {mark(pad + '┯')}"
        yield f"{gray('  ╰' + '─' * (len(pad) + 1))}{mark('╯')}"
