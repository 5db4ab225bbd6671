"""
Templine diagnostics: the data attached to a parse failure and a rich
renderer that shows the offending line(s) with carets under the span.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.rule import Rule
from rich.text import Text

from templine.source import Source, SourceSpan

__all__ = [
    "Severity",
    "Diagnostic",
    "FrameStyle",
    "render_diagnostic",
    "format_plain",
    "source_label",
]


class Severity(StrEnum):
    # parsing never warns; every diagnostic aborts the parse
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    message: str
    severity: Severity
    span: SourceSpan
    source: Source
    code: str | None = None
    notes: list[str] = field(default_factory=list)
    hint: str | None = None

    def shifted(self, source: Source, offset: int) -> Diagnostic:
        """Re-anchor this diagnostic inside `source`, `offset` characters further in."""
        return Diagnostic(
            message=self.message,
            severity=self.severity,
            span=self.span.shifted(offset),
            source=source,
            code=self.code,
            notes=list(self.notes),
            hint=self.hint,
        )


@dataclass(frozen=True, slots=True)
class FrameStyle:
    context_lines: int = 1
    tab_width: int = 4
    header: str = "bold red"
    label: str = "italic"
    gutter: str = "dim"
    caret: str = "bold red"
    note: str = "dim"
    hint: str = "italic dim"


def source_label(source: Source) -> str:
    return source.label if source.label is not None else "<string>"


def format_plain(d: Diagnostic) -> str:
    """One-line rendering for logs and `str(exc)`: `ERROR [code]: message at label:line:col`."""
    ln, col = d.source.pos_to_line_col(d.span.start)
    code = f" [{d.code}]" if d.code else ""
    return f"{d.severity.upper()}{code}: {d.message} at {source_label(d.source)}:{ln}:{col}"


def _span_end(source: Source, span: SourceSpan) -> tuple[int, int]:
    # (line, col) just past the last character of a non-empty span, so a
    # span covering a line terminator stays on its own line
    if not len(span):
        return source.pos_to_line_col(span.start)
    ln, col = source.pos_to_line_col(span.end - 1)
    return ln, col + 1


def _carets(line: str, start_col: int, end_col: int, tab_width: int) -> str:
    lead = len(line[: start_col - 1].expandtabs(tab_width))
    width = len(line[: end_col - 1].expandtabs(tab_width)) - lead
    return " " * lead + "^" * max(1, width)


def _code_frame(d: Diagnostic, style: FrameStyle) -> RenderableType:
    source = d.source
    first, first_col = source.pos_to_line_col(d.span.start)
    last, last_col = _span_end(source, d.span)

    lo = max(1, first - style.context_lines)
    hi = min(len(source.line_starts), last + style.context_lines)
    gutter_w = len(str(hi))

    body = Text()
    for line_no in range(lo, hi + 1):
        line = source.line_text(line_no)
        if line_no > lo:
            body.append("\n")
        body.append(f"{line_no:>{gutter_w}} | ", style=style.gutter)
        body.append(line.expandtabs(style.tab_width))

        if first <= line_no <= last:
            start = first_col if line_no == first else 1
            end = last_col if line_no == last else len(line) + 1
            body.append("\n" + " " * (gutter_w + 3))
            body.append(_carets(line, start, end, style.tab_width), style=style.caret)

    title = Text.assemble((source_label(source), style.label), f":{first}:{first_col}")
    return Panel.fit(body, title=title, border_style=style.header, padding=(0, 1))


def render_diagnostic(d: Diagnostic, style: FrameStyle | None = None) -> RenderableType:
    """Header line, rule, code frame, then any notes and the hint."""
    style = style or FrameStyle()

    head = Text()
    head.append(d.severity.upper(), style=style.header)
    if d.code:
        head.append(f" [{d.code}]")
    head.append(f": {d.message}")

    parts: list[RenderableType] = [head, Rule(style=style.header), _code_frame(d, style)]
    for note in d.notes:
        parts.append(Text.assemble(("• ", style.note), note))
    if d.hint:
        parts.append(Text.assemble(("Hint: ", style.hint), d.hint))
    return Group(*parts)
