"""Invocation of user callbacks, which may be plain functions or coroutines."""
from __future__ import annotations

from typing import Any, Awaitable, Callable, Union
import inspect

Callback = Callable[[Any], Union[Awaitable[None], None]]


async def invoke(callback: Callback, interaction: Any) -> None:
    """Call `callback` with the interaction, awaiting the result if needed.

    Exceptions raised by the callback propagate to the caller.
    """
    result = callback(interaction)
    if inspect.isawaitable(result):
        await result


async def noop(interaction: Any) -> None:
    return None
