"""Step definitions, their registry and the results of invoking them."""

from __future__ import annotations

import itertools
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from cukewire.regex import Regex, RegexSubmatch
from cukewire.table import Table

_step_ids = itertools.count(1)


class InvokeResultType(Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    PENDING = "pending"


@dataclass
class InvokeResult:
    """Outcome of running a step; a bare result counts as a failure."""

    type: InvokeResultType = InvokeResultType.FAILURE
    description: str = ""

    @classmethod
    def success(cls) -> InvokeResult:
        return cls(InvokeResultType.SUCCESS)

    @classmethod
    def failure(cls, description: Optional[str] = "") -> InvokeResult:
        return cls(InvokeResultType.FAILURE, description or "")

    @classmethod
    def pending(cls, description: Optional[str] = "") -> InvokeResult:
        return cls(InvokeResultType.PENDING, description or "")

    def is_success(self) -> bool:
        return self.type is InvokeResultType.SUCCESS

    def is_pending(self) -> bool:
        return self.type is InvokeResultType.PENDING


@dataclass
class InvokeArgs:
    """Arguments a step is invoked with: plain strings and an optional table."""

    args: list[str] = field(default_factory=list)
    table: Table = field(default_factory=Table)

    def add_arg(self, arg: str) -> None:
        self.args.append(arg)


@dataclass
class SingleStepMatch:
    """A step definition that matched, with the groups it captured."""

    step_info: Optional[StepInfo] = None
    submatches: list[RegexSubmatch] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.step_info is not None


@dataclass
class MatchResult:
    """All step definitions that matched a step description."""

    result_set: list[SingleStepMatch] = field(default_factory=list)

    def add_match(self, match: SingleStepMatch) -> None:
        self.result_set.append(match)

    def __bool__(self) -> bool:
        return bool(self.result_set)


class StepInfo:
    """A registered step definition: its pattern, source and how to run it.

    Every instance gets a new identifier, increasing across the process.
    """

    def __init__(
        self,
        step_matcher: str,
        source: str,
        step_factory: Callable[[], BasicStep],
    ) -> None:
        self.regex = Regex(step_matcher)
        self.source = source
        self._step_factory = step_factory
        self.id = next(_step_ids)

    def matches(self, step_description: str) -> SingleStepMatch:
        found = self.regex.find(step_description)
        if not found:
            return SingleStepMatch()
        return SingleStepMatch(self, list(found.submatches))

    def invoke_step(self, args: InvokeArgs) -> InvokeResult:
        """Create a fresh step object and invoke it with ``args``."""
        return self._step_factory().invoke(args)

    def __repr__(self) -> str:
        return f"StepInfo(id={self.id}, regex={self.regex.pattern!r})"


class StepManager:
    """Registry of step definitions, ordered by identifier."""

    def __init__(self) -> None:
        self._steps: dict[int, StepInfo] = {}

    def add_step(self, step_info: StepInfo) -> int:
        """Register a step; an identifier already taken keeps its definition."""
        self._steps.setdefault(step_info.id, step_info)
        return step_info.id

    def step_matches(self, step_description: str) -> MatchResult:
        result = MatchResult()
        for step_id in sorted(self._steps):
            match = self._steps[step_id].matches(step_description)
            if match:
                result.add_match(match)
        return result

    def get_step(self, step_id: int) -> Optional[StepInfo]:
        return self._steps.get(step_id)

    def clear_steps(self) -> None:
        self._steps.clear()

    def __len__(self) -> int:
        return len(self._steps)


class BasicStep(ABC):
    """Base of step implementations; turns what a body does into a result."""

    def __init__(self) -> None:
        self.args: Optional[InvokeArgs] = None
        self._current_result = InvokeResult.success()

    def invoke(self, args: InvokeArgs) -> InvokeResult:
        """Run the step body with ``args`` and report how it went.

        Exceptions raised by the body become failures carrying their message.
        """
        self.args = args
        self._current_result = InvokeResult.success()
        try:
            returned = self.invoke_step_body()
        except Exception as exc:
            return InvokeResult.failure(str(exc) or type(exc).__name__)
        if self._current_result.is_pending():
            return self._current_result
        return returned

    def pending(self, description: Optional[str] = "") -> None:
        """Mark the running step as pending."""
        self._current_result = InvokeResult.pending(description)

    @abstractmethod
    def body(self) -> None:
        """The step's own code."""

    @abstractmethod
    def invoke_step_body(self) -> InvokeResult:
        """Run ``body`` in the manner of a particular test framework."""


class GenericStep(BasicStep):
    """A step that runs its body directly and succeeds unless it raises."""

    def invoke_step_body(self) -> InvokeResult:
        self.body()
        return InvokeResult.success()