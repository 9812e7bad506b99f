"""JSON encoding of wire commands and responses, and the request handler."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from cukewire.engine import CukeEngine
from cukewire.wire_commands import (
    BeginScenarioCommand,
    EndScenarioCommand,
    FailingCommand,
    InvokeCommand,
    SnippetTextCommand,
    StepMatchesCommand,
    WireCommand,
)
from cukewire.wire_responses import (
    FailureResponse,
    PendingResponse,
    SnippetTextResponse,
    StepMatchesResponse,
    SuccessResponse,
    WireResponse,
)


class WireMessageCodecError(Exception):
    """Raised when a response cannot be encoded."""


class WireMessageCodec(ABC):
    """Turns request lines into commands and responses into lines."""

    @abstractmethod
    def decode(self, request: str) -> WireCommand:
        """Decode a request; requests not understood become a failing command."""

    @abstractmethod
    def encode(self, response: WireResponse) -> str:
        """Encode a response; raise WireMessageCodecError on failure."""


class _DecodeError(ValueError):
    pass


def _object(value: Any) -> dict:
    if not isinstance(value, dict):
        raise _DecodeError("expected an object")
    return value


def _field(value: Any, key: str) -> Any:
    obj = _object(value)
    if key not in obj:
        raise _DecodeError(f"missing key {key!r}")
    return obj[key]


def _string(value: Any) -> str:
    if not isinstance(value, str):
        raise _DecodeError("expected a string")
    return value


def _array(value: Any) -> list:
    if not isinstance(value, list):
        raise _DecodeError("expected an array")
    return value


def _string_row(value: Any) -> list[str]:
    return [_string(cell) for cell in _array(value)]


def _scenario_tags(args: Any) -> list[str]:
    if args is None:
        return []
    return [_string(tag) for tag in _array(_field(args, "tags"))]


def _fill_table(rows: list, table: list[list[str]]) -> None:
    if not rows:
        return
    columns = len(_string_row(rows[0]))
    del table[len(rows):]
    table.extend([] for _ in range(len(rows) - len(table)))
    for target, raw_row in zip(table, rows):
        row = _string_row(raw_row)
        if len(row) == columns:
            target.extend(row)


def _decode_begin_scenario(args: Any) -> WireCommand:
    return BeginScenarioCommand(_scenario_tags(args))


def _decode_end_scenario(args: Any) -> WireCommand:
    return EndScenarioCommand(_scenario_tags(args))


def _decode_step_matches(args: Any) -> WireCommand:
    return StepMatchesCommand(_string(_field(args, "name_to_match")))


def _decode_invoke(args: Any) -> WireCommand:
    params = _object(args)
    step_id = _string(_field(params, "id"))
    invoke_args: list[str] = []
    table: list[list[str]] = []
    for arg in _array(_field(params, "args")):
        if isinstance(arg, str):
            invoke_args.append(arg)
        elif isinstance(arg, list):
            _fill_table(arg, table)
    return InvokeCommand(step_id, invoke_args, table)


def _decode_snippet_text(args: Any) -> WireCommand:
    params = _object(args)
    return SnippetTextCommand(
        _string(_field(params, "step_keyword")),
        _string(_field(params, "step_name")),
        _string(_field(params, "multiline_arg_class")),
    )


_DECODERS: dict[str, Callable[[Any], WireCommand]] = {
    "begin_scenario": _decode_begin_scenario,
    "end_scenario": _decode_end_scenario,
    "step_matches": _decode_step_matches,
    "invoke": _decode_invoke,
    "snippet_text": _decode_snippet_text,
}


def _payload(response: WireResponse) -> list:
    match response:
        case SuccessResponse():
            return ["success"]
        case FailureResponse(message=message, exception_type=exception_type):
            detail = {}
            if message:
                detail["message"] = message
            if exception_type:
                detail["exception"] = exception_type
            return ["fail", detail] if detail else ["fail"]
        case PendingResponse(message=message):
            return ["pending", message]
        case StepMatchesResponse(matching_steps=steps):
            matches = []
            for step in steps:
                encoded: dict[str, Any] = {
                    "id": step.id,
                    "args": [{"val": arg.value, "pos": int(arg.position)} for arg in step.args],
                }
                if step.source:
                    encoded["source"] = step.source
                if step.regexp:
                    encoded["regexp"] = step.regexp
                matches.append(encoded)
            return ["success", matches]
        case SnippetTextResponse(step_snippet=snippet):
            return ["success", snippet]
    raise TypeError(f"unknown response {response!r}")


class JsonWireMessageCodec(WireMessageCodec):
    """The JSON encoding Cucumber's wire protocol uses."""

    def decode(self, request: str) -> WireCommand:
        try:
            message = _array(json.loads(request))
            if not message:
                raise _DecodeError("empty request")
            decoder = _DECODERS.get(_string(message[0]))
            if decoder is not None:
                args = message[1] if len(message) > 1 else None
                return decoder(args)
        except ValueError:
            pass
        return FailingCommand()

    def encode(self, response: WireResponse) -> str:
        try:
            return json.dumps(
                _payload(response),
                ensure_ascii=False,
                separators=(",", ":"),
                sort_keys=True,
            )
        except Exception as exc:
            raise WireMessageCodecError("Error decoding wire protocol response") from exc


class WireProtocolHandler:
    """Answers request lines by running them against an engine."""

    def __init__(self, codec: WireMessageCodec, engine: CukeEngine) -> None:
        self.codec = codec
        self.engine = engine

    def handle(self, request: str) -> str:
        try:
            command = self.codec.decode(request)
            return self.codec.encode(command.run(self.engine))
        except Exception:
            return '["fail"]'