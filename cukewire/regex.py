"""Regular expression matching that reports submatches with their positions."""

from __future__ import annotations

import re
from dataclasses import dataclass, field


@dataclass(frozen=True)
class RegexSubmatch:
    """A captured group: its text and its code-point offset in the subject."""

    value: str
    position: int


@dataclass
class RegexMatch:
    """Outcome of a search: whether it matched, and the captured groups."""

    matched: bool = False
    submatches: list[RegexSubmatch] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.matched


class Regex:
    """A compiled regular expression that keeps its source text."""

    def __init__(self, expr: str) -> None:
        self._expr = expr
        self._compiled = re.compile(expr)

    @property
    def pattern(self) -> str:
        return self._expr

    def find(self, expression: str) -> RegexMatch:
        """Search for the first match and return every group it captured.

        Groups that took no part in the match have an empty value and
        position -1.
        """
        found = self._compiled.search(expression)
        if found is None:
            return RegexMatch()
        submatches = [
            RegexSubmatch(found.group(index) or "", found.start(index))
            for index in range(1, self._compiled.groups + 1)
        ]
        return RegexMatch(True, submatches)

    def find_all(self, expression: str) -> RegexMatch:
        """Find every match and collect the first group of each one."""
        matched = False
        submatches: list[RegexSubmatch] = []
        for found in self._compiled.finditer(expression):
            matched = True
            if self._compiled.groups:
                submatches.append(RegexSubmatch(found.group(1) or "", found.start(1)))
        return RegexMatch(matched, submatches)

    def __str__(self) -> str:
        return self._expr

    def __repr__(self) -> str:
        return f"Regex({self._expr!r})"