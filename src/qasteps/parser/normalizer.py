from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

_LINE_BREAK = re.compile(r"\r\n|\r|\n")

# one leading token only: bullet glyph, "1" / "1." / "1)", or "A." / "a)"
_BULLET_PREFIX = re.compile(r"^(?:[-*•]\s*|\d+[.)]?\s*|[A-Za-z][.)]\s*)")


def clean_step(line: str) -> str:
    """Trim ``line`` and strip a single leading bullet or numbering token."""

    stripped = line.strip()
    if not stripped:
        return ""
    return _BULLET_PREFIX.sub("", stripped, count=1).strip()


@dataclass(frozen=True, slots=True)
class StepSequence:
    """Lazily normalized steps of one raw block.

    Iterating re-reads the raw block, so the sequence can be consumed any
    number of times and always yields the same steps in the same order.
    """

    raw: str

    def __iter__(self) -> Iterator[str]:
        for line in _LINE_BREAK.split(self.raw):
            step = clean_step(line)
            if step:
                yield step

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __bool__(self) -> bool:
        return next(iter(self), None) is not None

    def to_list(self) -> list[str]:
        return list(self)


def normalize(raw: str) -> StepSequence:
    return StepSequence(raw or "")
