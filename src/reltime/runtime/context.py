"""Flow-local "current engine" for the active logical flow of execution.

Uses contextvars for async-safe per-task state: a value set in one asyncio
task (or contextvars.Context) is visible to work it spawns afterwards, never
to sibling tasks, and is restored when the token is reset.

Typical use by a request handler:

    with use_engine(registry.get_engine(request_locale, request_zone)):
        handle_request()

Downstream code calls get_current_engine() without threading the engine
through every call.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token

from reltime.runtime.engine import ConversionEngine
from reltime.runtime.registry import INVARIANT_UTC

__all__ = [
    "get_current_engine",
    "reset_current_engine",
    "set_current_engine",
    "use_engine",
]

_current_engine: ContextVar[ConversionEngine | None] = ContextVar(
    "reltime_current_engine", default=None
)


def get_current_engine() -> ConversionEngine:
    """Engine bound to the current flow, or the invariant UTC engine."""
    engine = _current_engine.get()
    return INVARIANT_UTC if engine is None else engine


def set_current_engine(engine: ConversionEngine | None) -> Token[ConversionEngine | None]:
    """Bind an engine to the current flow.

    Args:
        engine: Engine to publish; None restores the invariant UTC default

    Returns:
        Token for reset_current_engine()

    Raises:
        TypeError: If engine is not a ConversionEngine or None
    """
    if engine is not None and not isinstance(engine, ConversionEngine):
        msg = f"engine must be ConversionEngine or None, got {type(engine).__name__}"
        raise TypeError(msg)
    return _current_engine.set(engine)


def reset_current_engine(token: Token[ConversionEngine | None]) -> None:
    """Restore the binding that was active before set_current_engine()."""
    _current_engine.reset(token)


@contextmanager
def use_engine(engine: ConversionEngine | None) -> Iterator[ConversionEngine]:
    """Bind an engine for the duration of a with-block."""
    token = set_current_engine(engine)
    try:
        yield get_current_engine()
    finally:
        reset_current_engine(token)
