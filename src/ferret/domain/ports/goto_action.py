"""Port for opening a result link outside the process."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class GotoActionPort(Protocol):
    """Opens one link (browser, editor, ...).

    Raises any exception on failure; the executor wraps it.
    """

    async def open(self, link: str) -> None: ...
