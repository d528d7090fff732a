"""Deadline combinator shared by every call into the semantic service.

Collaborator calls are best-effort: when one overruns its budget or raises,
the caller receives *fallback* instead of an exception.  The awaited work is
cancelled by :func:`asyncio.wait_for`, but work already handed to a thread
(model inference) keeps running in the background and its result is dropped.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, TypeVar

from src.utils.logging import get_logger

logger = get_logger("deadline")

T = TypeVar("T")
F = TypeVar("F")


async def with_deadline(
    operation: Awaitable[T],
    seconds: float,
    fallback: F,
    *,
    label: str = "operation",
) -> T | F:
    """Await *operation* for at most *seconds*.

    Parameters
    ----------
    operation:
        Coroutine or awaitable to run.
    seconds:
        Budget in seconds.
    fallback:
        Value returned on timeout or on any exception raised by *operation*.
    label:
        Name used in log events.

    Returns
    -------
    The operation's result, or *fallback*.
    """
    try:
        return await asyncio.wait_for(operation, timeout=seconds)
    except asyncio.TimeoutError:
        logger.debug("deadline_exceeded", operation=label, timeout_s=seconds)
        return fallback
    except Exception as exc:
        logger.debug("deadline_operation_failed", operation=label, error=str(exc))
        return fallback
