from __future__ import annotations

from dataclasses import dataclass

from templine.control.model import Control
from templine.control.parse import parse_line_control
from templine.errors import TemplateSyntaxError
from templine.options import ParseOptions, default_options
from templine.source import Source, SourceSpan


@dataclass(frozen=True, slots=True)
class TemplateLine:
    span: SourceSpan
    controls: tuple[Control, ...]


@dataclass(frozen=True, slots=True)
class Template:
    source: Source
    options: ParseOptions
    lines: tuple[TemplateLine, ...]

    @staticmethod
    def from_source(source: Source, options: ParseOptions | None = None) -> Template:
        opts = options if options is not None else default_options()
        lines: list[TemplateLine] = []

        for span in source.lines():
            try:
                controls = parse_line_control(opts, source.slice(span), source.label)
            except TemplateSyntaxError as e:
                # point into the whole source, not just the offending line
                raise e.relocated(source, span.start) from None
            lines.append(TemplateLine(span, tuple(controls)))

        return Template(source=source, options=opts, lines=tuple(lines))

    @staticmethod
    def from_string(
        text: str, options: ParseOptions | None = None, label: str | None = None
    ) -> Template:
        return Template.from_source(Source(text, label), options)

    @property
    def controls(self) -> tuple[Control, ...]:
        return tuple(c for line in self.lines for c in line.controls)
