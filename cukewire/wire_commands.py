"""Commands decoded from the wire, each run against a CukeEngine."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from cukewire.engine import (
    CukeEngine,
    InvokeFailureException,
    PendingStepException,
)
from cukewire.wire_responses import (
    FailureResponse,
    PendingResponse,
    SnippetTextResponse,
    StepMatchesResponse,
    SuccessResponse,
    WireResponse,
)


class WireCommand(ABC):
    """A request from Cucumber, ready to run."""

    @abstractmethod
    def run(self, engine: CukeEngine) -> WireResponse:
        """Carry out the command and return the response to send."""


@dataclass
class BeginScenarioCommand(WireCommand):
    tags: list[str] = field(default_factory=list)

    def run(self, engine: CukeEngine) -> WireResponse:
        engine.begin_scenario(self.tags)
        return SuccessResponse()


@dataclass
class EndScenarioCommand(WireCommand):
    tags: list[str] = field(default_factory=list)

    def run(self, engine: CukeEngine) -> WireResponse:
        engine.end_scenario(self.tags)
        return SuccessResponse()


@dataclass
class StepMatchesCommand(WireCommand):
    step_name: str

    def run(self, engine: CukeEngine) -> WireResponse:
        return StepMatchesResponse(list(engine.step_matches(self.step_name)))


@dataclass
class InvokeCommand(WireCommand):
    step_id: str
    args: list[str] = field(default_factory=list)
    table_arg: list[list[str]] = field(default_factory=list)

    def run(self, engine: CukeEngine) -> WireResponse:
        """Invoke the step; failures and pending steps become responses."""
        try:
            engine.invoke_step(self.step_id, self.args, self.table_arg)
        except InvokeFailureException as exc:
            return FailureResponse(exc.message, exc.exception_type)
        except PendingStepException as exc:
            return PendingResponse(exc.message)
        except Exception:
            return FailureResponse()
        return SuccessResponse()


@dataclass
class SnippetTextCommand(WireCommand):
    keyword: str
    name: str
    multiline_arg_class: str

    def run(self, engine: CukeEngine) -> WireResponse:
        return SnippetTextResponse(
            engine.snippet_text(self.keyword, self.name, self.multiline_arg_class)
        )


@dataclass
class FailingCommand(WireCommand):
    """Stands in for a request that could not be understood."""

    def run(self, engine: CukeEngine) -> WireResponse:
        return FailureResponse()