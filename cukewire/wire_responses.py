"""Responses a wire server sends back after running a command."""

from __future__ import annotations

from dataclasses import dataclass, field

from cukewire.engine import StepMatch


class WireResponse:
    """Base of every response to a wire command."""


@dataclass
class SuccessResponse(WireResponse):
    """The command succeeded and has nothing more to report."""


@dataclass
class FailureResponse(WireResponse):
    """The command failed; message and exception type may be empty."""

    message: str = ""
    exception_type: str = ""


@dataclass
class PendingResponse(WireResponse):
    """The invoked step is pending."""

    message: str = ""


@dataclass
class StepMatchesResponse(WireResponse):
    """The step definitions that match a step name."""

    matching_steps: list[StepMatch] = field(default_factory=list)


@dataclass
class SnippetTextResponse(WireResponse):
    """A step definition skeleton for an undefined step."""

    step_snippet: str = ""