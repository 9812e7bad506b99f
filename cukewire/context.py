"""Per-scenario context objects shared between step definitions."""

from __future__ import annotations

import weakref
from collections.abc import Callable
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class ContextManager:
    """Owns the context objects created during a scenario.

    Callers receive weak references; purging drops the manager's strong
    references so contexts die once nothing else holds them. Context
    objects must therefore support weak references.
    """

    def __init__(self) -> None:
        self._contexts: list[Any] = []
        self._scoped: dict[Callable[[], Any], weakref.ref] = {}

    def add_context(self, factory: Callable[[], T]) -> weakref.ref:
        """Create a context with ``factory``, keep it, and return a weak reference."""
        context = factory()
        self._contexts.append(context)
        return weakref.ref(context)

    def purge_contexts(self) -> None:
        self._contexts.clear()
        self._scoped.clear()

    def __len__(self) -> int:
        return len(self._contexts)

    def _scoped_context(self, factory: Callable[[], T]) -> T:
        reference = self._scoped.get(factory)
        context = reference() if reference is not None else None
        if context is None:
            reference = self.add_context(factory)
            self._scoped[factory] = reference
            context = reference()
        return context


class ScenarioScope(Generic[T]):
    """Gives access to the one context a factory produces per scenario.

    Every scope created with the same factory and manager shares the same
    object until the manager's contexts are purged.
    """

    def __init__(self, factory: Callable[[], T], manager: ContextManager) -> None:
        self._context = manager._scoped_context(factory)

    def get(self) -> T:
        return self._context