"""The interface a wire server drives, and the exceptions steps report with."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field


@dataclass
class StepMatchArg:
    """An argument captured from a step name and its position in it."""

    value: str
    position: int


@dataclass
class StepMatch:
    """A step definition that matches a step name."""

    id: str
    args: list[StepMatchArg] = field(default_factory=list)
    source: str = ""
    regexp: str = ""


class InvokeException(Exception):
    """Raised when invoking a step does not succeed."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvokeFailureException(InvokeException):
    """Raised when a step fails; carries the failure's type name."""

    def __init__(self, message: str, exception_type: str) -> None:
        super().__init__(message)
        self.exception_type = exception_type


class PendingStepException(InvokeException):
    """Raised when a step is not implemented yet."""


class CukeEngine(ABC):
    """Entry point through which Cucumber finds and runs step definitions."""

    @abstractmethod
    def step_matches(self, name: str) -> list[StepMatch]:
        """Return the step definitions whose pattern matches ``name``."""

    @abstractmethod
    def begin_scenario(self, tags: Sequence[str]) -> None:
        """Start a scenario with the given tags."""

    @abstractmethod
    def invoke_step(
        self,
        step_id: str,
        args: Sequence[str],
        table_arg: Sequence[Sequence[str]],
    ) -> None:
        """Run a step; raise InvokeException if it fails or is pending."""

    @abstractmethod
    def end_scenario(self, tags: Sequence[str]) -> None:
        """End the current scenario."""

    @abstractmethod
    def snippet_text(self, keyword: str, name: str, multiline_arg_class: str) -> str:
        """Return a step definition skeleton for an undefined step."""