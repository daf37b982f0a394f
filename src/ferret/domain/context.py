"""Cancellation scopes for search calls.

A ``SearchContext`` is handed from the query executor down to a
provider's ``search()`` and from there into every outbound request.
It becomes *done* exactly once, either because its deadline passed
(``DeadlineExceeded``) or because it, or one of its parents, was
cancelled (``Canceled``).

``run_cancellable()`` is the single primitive binding an awaitable to a
context: the awaitable runs as its own task and is raced against the
context.  When the context wins, the task is cancelled and drained
before the context error is raised, so no in-flight request outlives
the call.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

T = TypeVar("T")


class ContextError(Exception):
    """Base class for context termination reasons."""


class DeadlineExceeded(ContextError):
    def __init__(self, message: str = "context deadline exceeded") -> None:
        super().__init__(message)


class Canceled(ContextError):
    def __init__(self, message: str = "context canceled") -> None:
        super().__init__(message)


class SearchContext:
    """Cancellation scope with an optional deadline.

    Children derived with ``with_timeout()`` / ``with_cancel()`` finish
    when their parent finishes.  Children are context managers; leaving
    the ``with`` block cancels the child and releases its timer.
    """

    def __init__(self, parent: SearchContext | None = None) -> None:
        self._parent = parent
        self._children: set[SearchContext] = set()
        self._reason: type[ContextError] | None = None
        self._done = asyncio.Event()
        self._timer: asyncio.TimerHandle | None = None
        self._deadline: float | None = parent.deadline if parent else None

        if parent is not None:
            if parent._reason is not None:
                self._finish(parent._reason)
            else:
                parent._children.add(self)

    @classmethod
    def background(cls) -> SearchContext:
        """Root context: never done unless cancelled explicitly."""
        return cls()

    # ------------------------------------------------------------------
    # Derivation
    # ------------------------------------------------------------------

    def with_cancel(self) -> SearchContext:
        return SearchContext(self)

    def with_timeout(self, seconds: float) -> SearchContext:
        """Derive a child that finishes with ``DeadlineExceeded`` after *seconds*.

        Must be called from a running event loop.
        """
        child = SearchContext(self)
        if child.done:
            return child

        loop = asyncio.get_running_loop()
        deadline = loop.time() + max(seconds, 0.0)
        if child._deadline is not None and child._deadline <= deadline:
            # Parent fires first and propagates.
            return child

        child._deadline = deadline
        child._timer = loop.call_at(deadline, child._finish, DeadlineExceeded)
        return child

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def deadline(self) -> float | None:
        """Deadline in event-loop time, or None."""
        return self._deadline

    def time_left(self) -> float | None:
        """Seconds until the deadline (never negative), or None without one."""
        if self._deadline is None:
            return None
        return max(self._deadline - asyncio.get_running_loop().time(), 0.0)

    @property
    def done(self) -> bool:
        return self._reason is not None

    def error(self) -> ContextError | None:
        """A fresh exception describing why the context finished, or None."""
        return self._reason() if self._reason is not None else None

    def raise_if_done(self) -> None:
        if self._reason is not None:
            raise self._reason()

    async def wait(self) -> None:
        await self._done.wait()

    def cancel(self) -> None:
        self._finish(Canceled)

    def _finish(self, reason: type[ContextError]) -> None:
        if self._reason is not None:
            return
        self._reason = reason
        self._done.set()

        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

        children, self._children = self._children, set()
        for child in children:
            child._finish(reason)

        if self._parent is not None:
            self._parent._children.discard(self)

    def __enter__(self) -> SearchContext:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cancel()


async def run_cancellable(ctx: SearchContext, awaitable: Awaitable[T]) -> T:
    """Await *awaitable* unless *ctx* finishes first.

    - awaitable finishes first: its result is returned, or its exception
      raised, unchanged.
    - ctx finishes first: the task is cancelled, awaited until it has
      unwound, and ``DeadlineExceeded`` / ``Canceled`` is raised.
    - ctx already done: the awaitable is never started.
    """
    if ctx.done:
        if asyncio.iscoroutine(awaitable):
            awaitable.close()
        ctx.raise_if_done()

    task: asyncio.Future[T] = asyncio.ensure_future(awaitable)
    waiter = asyncio.ensure_future(ctx.wait())
    try:
        await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        await _abort(task)
        raise
    finally:
        waiter.cancel()

    if task.done():
        return task.result()

    await _abort(task)
    ctx.raise_if_done()
    raise Canceled()


async def _abort(task: asyncio.Future[T]) -> None:
    """Cancel *task* and wait until it has fully unwound.

    A cancellation of the caller while draining is deferred until the
    task is done, then re-raised.
    """
    task.cancel()
    interrupted = False
    while not task.done():
        try:
            await asyncio.wait({task})
        except asyncio.CancelledError:
            interrupted = True
    if not task.cancelled():
        # Mark the outcome as retrieved; the caller reports the context error.
        task.exception()
    if interrupted:
        raise asyncio.CancelledError()
