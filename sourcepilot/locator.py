"""Locate lines of a document by whole-line pattern matching."""

from __future__ import annotations

import re
from typing import Iterator, List, Pattern, Sequence, Union

from .models import CodeLine

PatternLike = Union[str, Pattern[str]]


def assignment_pattern(variable_name: str) -> str:
    """Whole-line pattern for ``variable_name`` followed by an assignment operator.

    Covers ``val x = ...``, ``val x: Foo = ...``, ``Foo x = ...`` and plain
    ``x = ...``; comparisons (``==``) and member writes (``a.x = ...``) are
    excluded.
    """
    name = re.escape(variable_name)
    return rf".*(?<![\w.]){name}\s*(?::\s*[\w.<>?, ]+?)?\s*=(?!=).*"


class LineLocator:
    """Answers "which line matches this pattern" over an ordered set of lines.

    The locator is pattern-agnostic: callers build and escape their own
    templates. Matching is always a whole-line match.
    """

    def __init__(self, lines: Sequence[CodeLine]) -> None:
        self._lines = lines

    @classmethod
    def from_text(cls, text: str) -> "LineLocator":
        return cls(
            [
                CodeLine(line_number=index, text=line)
                for index, line in enumerate(text.splitlines(), start=1)
            ]
        )

    def find_first(self, pattern: PatternLike) -> int:
        """Return the first matching line number, or -1 when nothing matches."""
        for line_number in self._matches(pattern):
            return line_number
        return -1

    def find_all(self, pattern: PatternLike) -> List[int]:
        return list(self._matches(pattern))

    def find_assignment(self, variable_name: str) -> int:
        return self.find_first(assignment_pattern(variable_name))

    def _matches(self, pattern: PatternLike) -> Iterator[int]:
        compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
        for line in self._lines:
            if not line.text.strip():
                continue
            if compiled.fullmatch(line.text):
                yield line.line_number


__all__ = ["LineLocator", "assignment_pattern"]
