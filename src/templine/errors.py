"""
Templine exceptions: a base TemplineException that wraps a Diagnostic and
renders using the same rich code-frame formatting.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from lark.exceptions import UnexpectedCharacters, UnexpectedInput
from rich.console import Console, ConsoleOptions, RenderResult

from templine.reporting.diagnostics import (
    Diagnostic,
    Severity,
    format_plain,
    render_diagnostic,
)
from templine.source import Source, SourceSpan

__all__ = ["TemplineException", "TemplateSyntaxError", "syntax_error", "nesting_error"]


@dataclass(slots=True)
class TemplineException(Exception):
    """
    Base templine exception that carries a Diagnostic and renders nicely with Rich.
    """

    diagnostic: Diagnostic

    # Plain-text fallback (CI/log files; or if user didn't use Console)
    def __str__(self) -> str:
        return format_plain(self.diagnostic)

    # Pretty rendering when printed via Rich Console
    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        _ = console
        _ = options
        yield render_diagnostic(self.diagnostic)


@dataclass(slots=True)
class TemplateSyntaxError(TemplineException):
    """No grammar alternative matched; the whole parse is rejected."""

    @property
    def position(self) -> int:
        return self.diagnostic.span.start

    @property
    def line_col(self) -> tuple[int, int]:
        return self.diagnostic.source.pos_to_line_col(self.diagnostic.span.start)

    @property
    def message(self) -> str:
        return self.diagnostic.message

    def relocated(self, source: Source, offset: int) -> TemplateSyntaxError:
        return TemplateSyntaxError(self.diagnostic.shifted(source, offset))


_KEYWORD_PREFIX = "_KW_"


def _expected_labels(names: Iterable[str], labels: Mapping[str, str]) -> list[str]:
    out: list[str] = []
    keywords = False
    for name in sorted(set(names)):
        if name.startswith(_KEYWORD_PREFIX):
            keywords = True
            continue
        label = labels.get(name, name)
        if label not in out:
            out.append(label)
    if keywords:
        out.insert(0, "directive keyword")
    return out


def syntax_error(
    exc: UnexpectedInput, source: Source, labels: Mapping[str, str]
) -> TemplateSyntaxError:
    """Translate a lark parse failure over `source` into a TemplateSyntaxError."""
    text = source.contents
    pos = getattr(exc, "pos_in_stream", None)
    if pos is None or pos < 0 or pos >= len(text):
        pos = len(text)
        message = "unexpected end of input"
        span = SourceSpan.point(pos)
    else:
        message = f"unexpected character {text[pos]!r}"
        span = SourceSpan(pos, pos + 1)

    if isinstance(exc, UnexpectedCharacters):
        expected = exc.allowed or ()
    else:
        expected = getattr(exc, "expected", None) or ()
    names = _expected_labels(expected, labels)
    hint = f"expected one of: {', '.join(names)}" if names else None

    return TemplateSyntaxError(
        Diagnostic(
            message=message,
            severity=Severity.ERROR,
            span=span,
            source=source,
            code="syntax",
            hint=hint,
        )
    )


def nesting_error(source: Source) -> TemplateSyntaxError:
    """Input whose parse tree is deeper than the interpreter's recursion limit."""
    return TemplateSyntaxError(
        Diagnostic(
            message="input nested too deeply",
            severity=Severity.ERROR,
            span=SourceSpan.point(0),
            source=source,
            code="syntax",
            notes=[
                "nesting depth is bounded by the Python recursion limit "
                f"(currently {sys.getrecursionlimit()})"
            ],
        )
    )
