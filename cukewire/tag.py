"""Tag expressions used to select which hooks run for a scenario."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from cukewire.regex import Regex

_OR_TAG_NOTATION = Regex(r"\s*@(\w+)\s*(?:,|$)")
_AND_TAG_NOTATION = Regex(r'\s*"([^"]+)"\s*(?:,|$)')


class TagExpression(ABC):
    """Something that decides whether a list of tags is selected."""

    @abstractmethod
    def matches(self, tags: Iterable[str]) -> bool:
        """Return True if the given scenario tags satisfy the expression."""


class OrTagExpression(TagExpression):
    """Matches when any of the listed tags, such as ``@a,@b``, is present."""

    def __init__(self, csv_tag_notation: str) -> None:
        found = _OR_TAG_NOTATION.find_all(csv_tag_notation)
        self.tags: list[str] = [submatch.value for submatch in found.submatches]

    def matches(self, tags: Iterable[str]) -> bool:
        present = set(tags)
        return any(tag in present for tag in self.tags)

    def __repr__(self) -> str:
        return f"OrTagExpression({self.tags!r})"


class AndTagExpression(TagExpression):
    """Matches when every quoted or-expression, such as ``"@a","@b"``, matches.

    An empty expression matches any tag list.
    """

    def __init__(self, csv_tag_notation: str = "") -> None:
        found = _AND_TAG_NOTATION.find_all(csv_tag_notation)
        self.expressions: list[OrTagExpression] = [
            OrTagExpression(submatch.value) for submatch in found.submatches
        ]

    def matches(self, tags: Iterable[str]) -> bool:
        tag_list = list(tags)
        return all(expression.matches(tag_list) for expression in self.expressions)

    def __repr__(self) -> str:
        return f"AndTagExpression({self.expressions!r})"