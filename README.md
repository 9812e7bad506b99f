# cukewire

`cukewire` is a library for writing Cucumber step definitions and hooks in
Python and serving them to a Cucumber runner over the JSON wire protocol.
It uses only the Python standard library and needs Python 3.10 or later.

## What is in it

| Module | Contents |
| --- | --- |
| `cukewire.regex` | `Regex`, `RegexMatch`, `RegexSubmatch`: searches that report captured groups and their positions |
| `cukewire.tag` | `TagExpression`, `OrTagExpression`, `AndTagExpression` |
| `cukewire.table` | `Table`, `TableError` |
| `cukewire.context` | `ContextManager`, `ScenarioScope` |
| `cukewire.steps` | `StepInfo`, `StepManager`, `BasicStep`, `GenericStep`, `InvokeArgs`, `InvokeResult`, `InvokeResultType`, `MatchResult`, `SingleStepMatch` |
| `cukewire.hooks` | `HookRegistrar`, `Hook` and its kinds, `Scenario`, `StepCallChain`, `CallableStep` |
| `cukewire.engine` | the abstract `CukeEngine`, `StepMatch`, `StepMatchArg`, and the exceptions `InvokeException`, `InvokeFailureException`, `PendingStepException` |
| `cukewire.wire_commands`, `cukewire.wire_responses` | the commands and responses of the wire protocol |
| `cukewire.wire_protocol` | `JsonWireMessageCodec`, `WireProtocolHandler`, `WireMessageCodecError` |
| `cukewire.wire_server` | `TCPSocketServer`, `UnixSocketServer` |

## Regular expressions

`Regex.find` searches for the first match and returns a `RegexMatch` that is
true when something matched. Its `submatches` hold every group of the
pattern, each with its text and its position counted in characters; a group
that took no part in the match has an empty value and position `-1`.
`Regex.find_all` collects the first group of every match.

```python
from cukewire.regex import Regex

found = Regex(r"^(\d+)\+\d+=(\d+)$").find("42+27=69")
bool(found)                                # True
[s.value for s in found.submatches]        # ["42", "69"]
```

## Tag expressions

Inside one expression, comma-separated tags are alternatives:

```python
from cukewire.tag import OrTagExpression

either = OrTagExpression("@a, @b,@c")
either.matches(["b"])      # True
either.matches(["x"])      # False
```

Quoted groups separated by commas must all match:

```python
from cukewire.tag import AndTagExpression

expr = AndTagExpression('"@a,@b", "@c", "@d,@e,@f"')
expr.matches(["a", "c", "d"])   # True
expr.matches(["x", "c", "f"])   # False
AndTagExpression("").matches(["anything"])  # True: no constraint
```

Tags given to a scenario are written without the leading `@`.

## Tables

```python
from cukewire.table import Table

table = Table()
table.add_column("name")
table.add_column("age")
table.add_row(["Alice", "30"])
table.add_row(["Bob", "25"])

table.hashes()   # [{"name": "Alice", "age": "30"}, {"name": "Bob", "age": "25"}]
len(table)       # 2
```

`TableError` is raised when a row is added before any column, when a row's
length differs from the number of columns, and when a column is added after
rows exist.

## Scenario context

`ContextManager.add_context(factory)` creates an object, keeps it and
returns a weak reference to it; `purge_contexts()` drops every object it
keeps. `ScenarioScope(factory, manager).get()` gives the same object to
every scope built from the same factory and manager until the contexts are
purged. Context objects must support weak references, so plain instances of
your own classes work but `int`, `str` or `list` do not.

## Steps

A step is a `GenericStep` subclass whose `body` does the work; the
arguments it was invoked with are in `self.args`. Calling `pending` inside
the body marks the step as pending. An exception raised from the body
becomes a failure whose description is the exception's message, or its
type name when the message is empty.

```python
from cukewire.steps import GenericStep, InvokeArgs


class NotWrittenYet(GenericStep):
    def body(self):
        self.pending("still to do")


result = NotWrittenYet().invoke(InvokeArgs())
result.is_pending()    # True
result.description     # "still to do"
```

A `StepInfo` pairs a step's regular expression with a source description
and a factory for the step object; each one receives a new numeric `id`.
Register it with a `StepManager`:

```python
from cukewire.steps import StepInfo, StepManager

manager = StepManager()
step_id = manager.add_step(StepInfo(r"I have (\d+) cukes", "steps.py:10", NotWrittenYet))

matches = manager.step_matches("I have 42 cukes")
bool(matches)                                   # True
matches.result_set[0].submatches[0].value       # "42"
manager.get_step(step_id).invoke_step(InvokeArgs()).is_pending()   # True
```

`step_matches` returns every registered step whose expression is found in
the text, in order of registration.

## Hooks

A `HookRegistrar` holds hooks and runs them when asked. Its decorators
register plain functions:

```python
from cukewire.hooks import HookRegistrar, Scenario

hooks = HookRegistrar()

@hooks.before("@db")
def open_database():
    ...

@hooks.around_step("@slow,@db")
def timed(step):
    step.call()          # runs the rest of the chain and the step

@hooks.after_step()
def after_each_step():
    ...

scenario = Scenario(tags=["db"])
hooks.exec_before_hooks(scenario)
```

Each argument to `before`, `around_step`, `after_step` and `after` is one
or-expression, and all of them must match the scenario's tags; with no
arguments the hook always runs. `before_all` and `after_all` take no tags
and always run, via `exec_before_all_hooks` and `exec_after_all_hooks`.

`exec_step_chain(scenario, step_info, args)` runs a step through the
around-step hooks, outermost first in registration order, and returns its
`InvokeResult`. An around hook that does not call `step.call()` stops the
step from running; an around hook whose tags do not match passes straight
through to the step. Without a step the result is a failure.

Hooks can also be written as subclasses of `BeforeHook`, `AroundStepHook`,
`AfterStepHook`, `AfterHook`, `BeforeAllHook` or `AfterAllHook` that define
`body`, and registered with the matching `add_*` method.

## Serving a Cucumber runner

The wire server drives a `CukeEngine`, an abstract class with five methods:
`step_matches`, `begin_scenario`, `invoke_step`, `end_scenario` and
`snippet_text`. A minimal engine over a `StepManager` might look like this:

```python
from cukewire.engine import (
    CukeEngine, InvokeFailureException, PendingStepException, StepMatch, StepMatchArg,
)
from cukewire.steps import InvokeArgs


class MyEngine(CukeEngine):
    def __init__(self, manager):
        self.manager = manager

    def step_matches(self, name):
        return [
            StepMatch(
                id=str(match.step_info.id),
                args=[StepMatchArg(s.value, s.position) for s in match.submatches],
                source=match.step_info.source,
                regexp=match.step_info.regex.pattern,
            )
            for match in self.manager.step_matches(name).result_set
        ]

    def begin_scenario(self, tags):
        pass

    def end_scenario(self, tags):
        pass

    def invoke_step(self, step_id, args, table_arg):
        result = self.manager.get_step(int(step_id)).invoke_step(InvokeArgs(list(args)))
        if result.is_pending():
            raise PendingStepException(result.description)
        if not result.is_success():
            raise InvokeFailureException(result.description, "")

    def snippet_text(self, keyword, name, multiline_arg_class):
        return ""
```

Put it behind the wire protocol:

```python
from cukewire.wire_protocol import JsonWireMessageCodec, WireProtocolHandler
from cukewire.wire_server import TCPSocketServer

handler = WireProtocolHandler(JsonWireMessageCodec(), MyEngine(manager))

with TCPSocketServer(handler) as server:
    server.listen("127.0.0.1", 3902)
    print("Listening on", server.listen_endpoint())
    server.accept_once()
```

`accept_once` accepts a single connection and answers one JSON request per
line until the runner disconnects. `listen` defaults to `127.0.0.1` and
port `0`, which selects an ephemeral port; `listen_endpoint()` returns the
`(host, port)` actually bound. `UnixSocketServer.listen(path)` listens on a
Unix socket instead, replacing an existing socket file at that path, and
removes the file when the server is closed.

Malformed or unknown requests are answered with `["fail"]`. A step that
raises `InvokeFailureException` is reported as a failure with its message
and exception type, `PendingStepException` as pending, and any other
exception as a bare failure.

## What it does not do

- There is no ready-made `CukeEngine`: linking the step registry and the
  hooks to scenarios, step invocation and snippet text is left to your own
  engine, as in the sketch above.
- There is no command-line program; a server is started from your own code.
- Steps are registered by building `StepInfo` objects; there are no
  decorators for step definitions.