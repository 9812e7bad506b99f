"""Scenario and step hooks, their registry and the around-step call chain."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Optional

from cukewire.steps import InvokeArgs, InvokeResult, StepInfo
from cukewire.tag import AndTagExpression


@dataclass
class Scenario:
    """A running scenario and its tags."""

    tags: list[str] = field(default_factory=list)


class CallableStep(ABC):
    """Handle an around-step hook calls to continue to the step."""

    @abstractmethod
    def call(self) -> None:
        """Continue with the rest of the step chain."""


class Hook(ABC):
    """Code run around scenarios or steps, optionally selected by tags."""

    def __init__(self) -> None:
        self._tag_expression = AndTagExpression("")

    def set_tags(self, csv_tag_notation: str) -> None:
        self._tag_expression = AndTagExpression(csv_tag_notation)

    def invoke_hook(self, scenario: Optional[Scenario], step: Optional[CallableStep]) -> None:
        if self.tags_match(scenario):
            self.body()
        else:
            self.skip_hook()

    def skip_hook(self) -> None:
        """Called instead of the body when the tags do not match."""

    @abstractmethod
    def body(self) -> None:
        """The hook's own code."""

    def tags_match(self, scenario: Optional[Scenario]) -> bool:
        tags = scenario.tags if scenario is not None else []
        return self._tag_expression.matches(tags)


class BeforeHook(Hook):
    """Runs before each matching scenario."""


class AroundStepHook(Hook):
    """Wraps each step of matching scenarios; the body decides whether to call it."""

    def __init__(self) -> None:
        super().__init__()
        self.step: Optional[CallableStep] = None

    def invoke_hook(self, scenario: Optional[Scenario], step: Optional[CallableStep]) -> None:
        self.step = step
        super().invoke_hook(scenario, step)

    def skip_hook(self) -> None:
        if self.step is not None:
            self.step.call()


class AfterStepHook(Hook):
    """Runs after each step of matching scenarios."""


class AfterHook(Hook):
    """Runs after each matching scenario."""


class UnconditionalHook(Hook):
    """A hook that runs regardless of tags."""

    def invoke_hook(self, scenario: Optional[Scenario], step: Optional[CallableStep]) -> None:
        self.body()


class BeforeAllHook(UnconditionalHook):
    """Runs once before all scenarios."""


class AfterAllHook(UnconditionalHook):
    """Runs once after all scenarios."""


def _tag_notation(tags: Iterable[str]) -> str:
    return ", ".join(f'"{tag}"' for tag in tags)


def _function_hook(base: type, function: Callable, with_step: bool = False) -> Hook:
    class _FunctionHook(base):
        def body(self) -> None:
            if with_step:
                function(self.step)
            else:
                function()

    _FunctionHook.__name__ = getattr(function, "__name__", base.__name__)
    return _FunctionHook()


class HookRegistrar:
    """Holds registered hooks and runs them at the right moments."""

    def __init__(self) -> None:
        self._before_all: list[Hook] = []
        self._before: list[Hook] = []
        self._around_step: list[AroundStepHook] = []
        self._after_step: list[Hook] = []
        self._after: list[Hook] = []
        self._after_all: list[Hook] = []

    @staticmethod
    def _exec_hooks(hooks: list[Hook], scenario: Optional[Scenario]) -> None:
        for hook in hooks:
            hook.invoke_hook(scenario, None)

    def add_before_hook(self, hook: BeforeHook) -> None:
        self._before.append(hook)

    def exec_before_hooks(self, scenario: Optional[Scenario]) -> None:
        self._exec_hooks(self._before, scenario)

    def add_around_step_hook(self, hook: AroundStepHook) -> None:
        self._around_step.append(hook)

    def exec_step_chain(
        self,
        scenario: Optional[Scenario],
        step_info: Optional[StepInfo],
        args: InvokeArgs,
    ) -> InvokeResult:
        return StepCallChain(scenario, step_info, args, self._around_step).execute()

    def add_after_step_hook(self, hook: AfterStepHook) -> None:
        self._after_step.append(hook)

    def exec_after_step_hooks(self, scenario: Optional[Scenario]) -> None:
        self._exec_hooks(self._after_step, scenario)

    def add_after_hook(self, hook: AfterHook) -> None:
        self._after.append(hook)

    def exec_after_hooks(self, scenario: Optional[Scenario]) -> None:
        self._exec_hooks(self._after, scenario)

    def add_before_all_hook(self, hook: BeforeAllHook) -> None:
        self._before_all.append(hook)

    def exec_before_all_hooks(self) -> None:
        self._exec_hooks(self._before_all, None)

    def add_after_all_hook(self, hook: AfterAllHook) -> None:
        self._after_all.append(hook)

    def exec_after_all_hooks(self) -> None:
        self._exec_hooks(self._after_all, None)

    def before(self, *args: str) -> Callable[[Callable[[], None]], Callable[[], None]]:
        """Decorator registering a before hook; each argument is an or-expression."""

        def register(function: Callable[[], None]) -> Callable[[], None]:
            hook = _function_hook(BeforeHook, function)
            hook.set_tags(_tag_notation(args))
            self.add_before_hook(hook)
            return function

        return register

    def around_step(self, *args: str) -> Callable[[Callable], Callable]:
        """Decorator registering an around-step hook; the function gets the step."""

        def register(function: Callable[[CallableStep], None]) -> Callable:
            hook = _function_hook(AroundStepHook, function, with_step=True)
            hook.set_tags(_tag_notation(args))
            self.add_around_step_hook(hook)
            return function

        return register

    def after_step(self, *args: str) -> Callable[[Callable[[], None]], Callable[[], None]]:
        """Decorator registering an after-step hook."""

        def register(function: Callable[[], None]) -> Callable[[], None]:
            hook = _function_hook(AfterStepHook, function)
            hook.set_tags(_tag_notation(args))
            self.add_after_step_hook(hook)
            return function

        return register

    def after(self, *args: str) -> Callable[[Callable[[], None]], Callable[[], None]]:
        """Decorator registering an after hook."""

        def register(function: Callable[[], None]) -> Callable[[], None]:
            hook = _function_hook(AfterHook, function)
            hook.set_tags(_tag_notation(args))
            self.add_after_hook(hook)
            return function

        return register

    def before_all(self) -> Callable[[Callable[[], None]], Callable[[], None]]:
        """Decorator registering a hook run once before all scenarios."""

        def register(function: Callable[[], None]) -> Callable[[], None]:
            self.add_before_all_hook(_function_hook(BeforeAllHook, function))
            return function

        return register

    def after_all(self) -> Callable[[Callable[[], None]], Callable[[], None]]:
        """Decorator registering a hook run once after all scenarios."""

        def register(function: Callable[[], None]) -> Callable[[], None]:
            self.add_after_all_hook(_function_hook(AfterAllHook, function))
            return function

        return register


class StepCallChain:
    """Runs a step through its around-step hooks, outermost first."""

    def __init__(
        self,
        scenario: Optional[Scenario],
        step_info: Optional[StepInfo],
        step_args: InvokeArgs,
        around_hooks: Iterable[AroundStepHook],
    ) -> None:
        self.scenario = scenario
        self.step_info = step_info
        self.step_args = step_args
        self._around_hooks = list(around_hooks)
        self._next_hooks = iter(())
        self.result = InvokeResult()

    def execute(self) -> InvokeResult:
        """Run the chain; without a step the result is a failure."""
        self.result = InvokeResult()
        if self.step_info is None:
            self.result = InvokeResult.failure("Step not found")
            return self.result
        self._next_hooks = iter(self._around_hooks)
        self.exec_next()
        return self.result

    def exec_next(self) -> None:
        hook = next(self._next_hooks, None)
        if hook is None:
            self._exec_step()
        else:
            hook.invoke_hook(self.scenario, CallableStepChain(self))

    def _exec_step(self) -> None:
        if self.step_info is not None:
            self.result = self.step_info.invoke_step(self.step_args)


class CallableStepChain(CallableStep):
    """Continues a StepCallChain from inside an around-step hook."""

    def __init__(self, chain: StepCallChain) -> None:
        self.chain = chain

    def call(self) -> None:
        self.chain.exec_next()