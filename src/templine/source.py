from __future__ import annotations

import bisect
from dataclasses import dataclass, field


@dataclass(frozen=True, order=True, slots=True)
class SourceSpan:
    '''Half-open [start, end) character range; start == end marks a point such as end of input.'''
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"SourceSpan.start cannot be negative (got {self.start})")
        if self.end < self.start:
            raise ValueError(f"SourceSpan.end ({self.end}) < start ({self.start})")

    @classmethod
    def point(cls, pos: int) -> SourceSpan:
        return cls(pos, pos)

    def shifted(self, offset: int) -> SourceSpan:
        return SourceSpan(self.start + offset, self.end + offset)

    def __len__(self) -> int:
        return self.end - self.start


def _strip_terminator(line: str) -> str:
    return next(iter(line.splitlines()), "")


@dataclass(frozen=True, slots=True)
class Source:
    '''Template text plus an optional label naming where it came from.'''
    contents: str
    label: str | None = None

    _lines: tuple[SourceSpan, ...] | None = field(
        default=None, init=False, repr=False, compare=False
    )

    def slice(self, span: SourceSpan) -> str:
        if span.end > len(self.contents):
            raise ValueError(f"{span} runs past the end of the source ({len(self.contents)})")
        return self.contents[span.start:span.end]

    def lines(self) -> tuple[SourceSpan, ...]:
        '''Span of every line, terminators included; an empty Source has no lines.'''
        spans = self._lines
        if spans is None:
            pos = 0
            acc = []
            for part in self.contents.splitlines(keepends=True):
                acc.append(SourceSpan(pos, pos + len(part)))
                pos += len(part)
            spans = tuple(acc)
            object.__setattr__(self, "_lines", spans)
        return spans

    @property
    def line_starts(self) -> tuple[int, ...]:
        spans = self.lines()
        starts = [0] + [s.end for s in spans[:-1]]
        # a trailing terminator opens one more (empty) line so EOF has a position
        if spans and len(_strip_terminator(self.slice(spans[-1]))) < len(spans[-1]):
            starts.append(spans[-1].end)
        return tuple(starts)

    def line_text(self, line_no: int) -> str:
        '''Text of a 1-indexed line without its terminator.'''
        starts = self.line_starts
        lo = starts[line_no - 1]
        hi = starts[line_no] if line_no < len(starts) else len(self.contents)
        return _strip_terminator(self.contents[lo:hi])

    def pos_to_line_col(self, pos: int) -> tuple[int, int]:
        '''returns 1-indexed (line, col), editor-style; accepts pos == len(contents).'''
        if not (0 <= pos <= len(self.contents)):
            raise ValueError(f"pos {pos} out of range [0, {len(self.contents)}]")
        starts = self.line_starts
        idx = bisect.bisect_right(starts, pos) - 1
        return (idx + 1, pos - starts[idx] + 1)
