import pytest

from cukewire.engine import (
    CukeEngine,
    InvokeException,
    InvokeFailureException,
    PendingStepException,
    StepMatch,
    StepMatchArg,
)


class RecordingEngine(CukeEngine):
    def __init__(self):
        self.calls = []

    def step_matches(self, name):
        self.calls.append(("step_matches", name))
        return [StepMatch(id="1", args=[StepMatchArg(name, 0)])]

    def begin_scenario(self, tags):
        self.calls.append(("begin_scenario", list(tags)))

    def invoke_step(self, step_id, args, table_arg):
        self.calls.append(("invoke_step", step_id, list(args), table_arg))
        if step_id == "pending":
            raise PendingStepException("S")

    def end_scenario(self, tags):
        self.calls.append(("end_scenario", list(tags)))

    def snippet_text(self, keyword, name, multiline_arg_class):
        return f"{keyword}|{name}|{multiline_arg_class}"


def test_engine_cannot_be_instantiated_directly():
    with pytest.raises(TypeError):
        CukeEngine()
    assert set(CukeEngine.__abstractmethods__) == {
        "step_matches",
        "begin_scenario",
        "invoke_step",
        "end_scenario",
        "snippet_text",
    }


def test_concrete_engine_receives_calls():
    engine = RecordingEngine()
    engine.begin_scenario(["bar", "baz"])
    matches = engine.step_matches("name to match")
    engine.end_scenario([])
    assert matches == [StepMatch(id="1", args=[StepMatchArg("name to match", 0)])]
    assert engine.calls == [
        ("begin_scenario", ["bar", "baz"]),
        ("step_matches", "name to match"),
        ("end_scenario", []),
    ]


def test_pending_step_is_an_invoke_exception():
    error = PendingStepException("S")
    assert error.message == "S"
    assert isinstance(error, InvokeException)

    engine = RecordingEngine()
    with pytest.raises(InvokeException) as info:
        engine.invoke_step("pending", [], [])
    assert info.value.message == "S"


def test_failure_exception_carries_message_and_type():
    error = InvokeFailureException("A", "B")
    assert error.message == "A"
    assert error.exception_type == "B"
    assert str(error) == "A"
    assert isinstance(error, InvokeException)


def test_step_match_defaults_are_empty():
    match = StepMatch(id="1234")
    assert match.args == []
    assert match.source == ""
    assert match.regexp == ""


def test_step_match_args_are_not_shared():
    first = StepMatch(id="1")
    second = StepMatch(id="2")
    first.args.append(StepMatchArg("odd", 5))
    assert second.args == []
    assert first.args == [StepMatchArg("odd", 5)]