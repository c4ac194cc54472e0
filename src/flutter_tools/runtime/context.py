"""Scoped override context.

Collaborators are read through ``get(SlotType)`` instead of being threaded
through every call. An invocation pushes a scope of replacement generators
with ``override_scope`` (or ``run`` for asynchronous bodies); lookups resolve
innermost scope first, then enclosing scopes, then the process-wide default
registered with ``register_default``.

Scopes live in a ``ContextVar`` so they follow the current thread and every
asyncio task created while the scope is active.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from typing import TypeVar, cast

from flutter_tools.exceptions import ContextSlotMissing
from flutter_tools.invariants import never

T = TypeVar("T")
Generator = Callable[[], object]


@dataclass
class OverrideScope:
    generators: Mapping[type, Generator]
    values: dict[type, object] = field(default_factory=dict)

    def resolve(self, slot: type) -> tuple[bool, object]:
        if slot in self.values:
            return True, self.values[slot]
        generator = self.generators.get(slot)
        if generator is None:
            return False, None
        value = generator()
        self.values[slot] = value
        return True, value


_SCOPES: ContextVar[tuple[OverrideScope, ...]] = ContextVar(
    "flutter_tools_override_scopes",
    default=(),
)

_DEFAULT_GENERATORS: dict[type, Generator] = {}
_DEFAULT_VALUES: dict[type, object] = {}


def register_default(slot: type, generator: Generator) -> None:
    if not isinstance(slot, type):
        never("context slots are keyed by class", slot=slot)
    _DEFAULT_GENERATORS[slot] = generator
    _DEFAULT_VALUES.pop(slot, None)


def clear_default_values() -> None:
    """Forget memoized defaults so the next lookup rebuilds them."""
    _DEFAULT_VALUES.clear()


def constant(value: object) -> Generator:
    return lambda: value


def active_depth() -> int:
    return len(_SCOPES.get())


def get(slot: type[T]) -> T:
    for scope in reversed(_SCOPES.get()):
        found, value = scope.resolve(slot)
        if found:
            return cast(T, value)
    if slot in _DEFAULT_VALUES:
        return cast(T, _DEFAULT_VALUES[slot])
    generator = _DEFAULT_GENERATORS.get(slot)
    if generator is None:
        raise ContextSlotMissing(slot)
    value = generator()
    _DEFAULT_VALUES[slot] = value
    return cast(T, value)


def push_scope(overrides: Mapping[type, Generator]) -> Token[tuple[OverrideScope, ...]]:
    scope = OverrideScope(generators=dict(overrides))
    return _SCOPES.set((*_SCOPES.get(), scope))


def pop_scope(token: Token[tuple[OverrideScope, ...]]) -> None:
    _SCOPES.reset(token)


@contextmanager
def override_scope(overrides: Mapping[type, Generator] | None = None) -> Iterator[None]:
    token = push_scope(overrides or {})
    try:
        yield
    finally:
        pop_scope(token)


async def run(
    body: Callable[[], T | Awaitable[T]],
    *,
    overrides: Mapping[type, Generator] | None = None,
) -> T:
    """Run ``body`` with ``overrides`` pushed, awaiting it if it is async.

    The scope is popped once the body has fully completed, including when it
    raises.
    """
    with override_scope(overrides):
        result = body()
        if inspect.isawaitable(result):
            return await result
        return result
