"""Invoke helpers: call sync or async callables uniformly.

Collaborators and lifecycle hooks may be ``def`` or ``async def``.
The sync/async check lives here so callers just ``await invoke(...)``.
"""

import inspect
from collections.abc import Callable, Iterable
from typing import Any

import anyio.to_thread


def _is_async(func: Callable[..., Any]) -> bool:
    return inspect.iscoroutinefunction(func) or inspect.iscoroutinefunction(
        getattr(func, "__call__", None)
    )


def _run_sync(func: Callable[..., Any], *args: Any) -> Any:
    """Run a blocking call in an anyio worker thread the caller may abandon."""
    return anyio.to_thread.run_sync(func, *args, abandon_on_cancel=True)


async def invoke(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it is awaitable."""
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


async def invoke_offloaded(func: Callable[..., Any], *args: Any) -> Any:
    """Like ``invoke``, but plain ``def`` callables run in a worker thread.

    The event loop keeps serving while a blocking callable runs, and an
    enclosing cancel scope (a deadline) takes effect without waiting for it.
    The abandoned thread runs to completion in the background.
    """
    if _is_async(func):
        return await invoke(func, *args)
    result = await _run_sync(func, *args)
    if inspect.isawaitable(result):
        result = await result
    return result


async def run_hooks(hooks: Iterable[Callable[..., Any]]) -> None:
    """Run zero-argument hooks in order, awaiting the async ones."""
    for hook in hooks:
        await invoke(hook)
