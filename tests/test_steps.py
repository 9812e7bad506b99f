import pytest

from cukewire.steps import (
    GenericStep,
    InvokeArgs,
    InvokeResult,
    InvokeResultType,
    MatchResult,
    SingleStepMatch,
    StepInfo,
    StepManager,
)

A_MATCHER = "a matcher"
ANOTHER_MATCHER = "another matcher"
A_THIRD_MATCHER = "a third matcher"
NO_MATCH = "no match"


class EmptyStep(GenericStep):
    def body(self):
        pass


class PendingStep(GenericStep):
    def body(self):
        self.pending()


class PendingStepWithDescription(GenericStep):
    def body(self):
        self.pending("A description")


class RaisingStep(GenericStep):
    def body(self):
        raise ValueError("boom")


class ArgsRecordingStep(GenericStep):
    seen = []

    def body(self):
        ArgsRecordingStep.seen.append(list(self.args.args))


@pytest.fixture
def manager():
    return StepManager()


def add_step_definition(manager, matcher):
    return manager.add_step(StepInfo(matcher, "", EmptyStep))


def result_set(manager, description):
    return manager.step_matches(description).result_set


def unique_match_id_or_zero(manager, description):
    matches = result_set(manager, description)
    return matches[0].step_info.id if len(matches) == 1 else 0


def extracted_params(manager, description):
    matches = result_set(manager, description)
    assert len(matches) == 1
    return {sub.position: sub.value for sub in matches[0].submatches}


def test_holds_non_conflicting_steps(manager):
    assert len(manager) == 0
    add_step_definition(manager, A_MATCHER)
    add_step_definition(manager, ANOTHER_MATCHER)
    add_step_definition(manager, A_THIRD_MATCHER)
    assert len(manager) == 3


def test_holds_conflicting_steps(manager):
    assert len(manager) == 0
    for _ in range(3):
        add_step_definition(manager, A_MATCHER)
    assert len(manager) == 3


def test_matches_steps_with_non_regex_matchers(manager):
    assert not result_set(manager, NO_MATCH)
    a_index = add_step_definition(manager, A_MATCHER)
    assert unique_match_id_or_zero(manager, A_MATCHER) == a_index
    another_index = add_step_definition(manager, ANOTHER_MATCHER)
    assert unique_match_id_or_zero(manager, ANOTHER_MATCHER) == another_index
    assert unique_match_id_or_zero(manager, A_MATCHER) == a_index


def test_matches_steps_with_regex_matchers(manager):
    add_step_definition(manager, r"match the number (\d+)")
    assert len(result_set(manager, "match the number 42")) == 1
    assert len(result_set(manager, r"match the number (\d+)")) != 1
    assert len(result_set(manager, "match the number one")) != 1


def test_extracts_params_from_regex_matchers(manager):
    add_step_definition(manager, "match no params")
    assert extracted_params(manager, "match no params") == {}
    add_step_definition(manager, r"match the (\w+) param")
    assert extracted_params(manager, "match the first param") == {10: "first"}
    add_step_definition(manager, "match a (.+)$")
    assert extracted_params(manager, "match a  string  with  spaces  ") == {
        8: " string  with  spaces  "
    }
    add_step_definition(manager, r"match params (\w+), (\w+) and (\w+)")
    assert extracted_params(manager, "match params A, B and C") == {
        13: "A",
        16: "B",
        22: "C",
    }


def test_handles_multiple_matches(manager):
    add_step_definition(manager, A_MATCHER)
    add_step_definition(manager, ANOTHER_MATCHER)
    add_step_definition(manager, A_MATCHER)
    assert len(result_set(manager, A_MATCHER)) == 2


def test_matches_steps_with_non_ascii_matchers(manager):
    index = add_step_definition(manager, "خيار")
    assert unique_match_id_or_zero(manager, "خيار") == index
    assert not result_set(manager, "cetriolo")
    assert not result_set(manager, "огурец")
    assert not result_set(manager, "黄瓜")


def test_get_step_and_clear(manager):
    index = add_step_definition(manager, A_MATCHER)
    assert manager.get_step(index).regex.pattern == A_MATCHER
    assert manager.get_step(index + 10_000) is None
    manager.clear_steps()
    assert len(manager) == 0
    assert manager.get_step(index) is None


def test_step_ids_increase():
    first = StepInfo("x", "", EmptyStep)
    second = StepInfo("x", "", EmptyStep)
    assert second.id > first.id


def test_handles_pending_steps():
    result = PendingStep().invoke(InvokeArgs())
    assert result.is_pending()
    assert result.description == ""

    result = PendingStepWithDescription().invoke(InvokeArgs())
    assert result.is_pending()
    assert result.description == "A description"


def test_successful_step_returns_success():
    result = EmptyStep().invoke(InvokeArgs())
    assert result.is_success()


def test_raising_step_returns_failure_with_message():
    result = RaisingStep().invoke(InvokeArgs())
    assert result.type is InvokeResultType.FAILURE
    assert result.description == "boom"


def test_step_info_invoke_passes_args():
    ArgsRecordingStep.seen.clear()
    args = InvokeArgs()
    args.add_arg("p1")
    args.add_arg("p2")
    result = StepInfo("x", "", ArgsRecordingStep).invoke_step(args)
    assert result.is_success()
    assert ArgsRecordingStep.seen == [["p1", "p2"]]


def test_invoke_result_defaults_and_factories():
    assert InvokeResult().type is InvokeResultType.FAILURE
    assert InvokeResult.failure("bad").description == "bad"
    assert not InvokeResult.failure("bad").is_success()
    assert InvokeResult.pending(None).description == ""


def test_match_result_truthiness():
    result = MatchResult()
    assert not result
    assert not SingleStepMatch()
    result.add_match(SingleStepMatch(StepInfo("y", "", EmptyStep)))
    assert result
    assert len(result.result_set) == 1