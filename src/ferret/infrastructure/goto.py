"""Goto action that opens a result link with an external command."""

from __future__ import annotations

import asyncio
import shlex

import structlog

log = structlog.get_logger(__name__)


class GotoCommandError(Exception):
    """The goto command could not be started or exited non-zero."""

    def __init__(self, message: str, *, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode


class CommandGotoAction:
    """Runs ``<command> <link>`` (e.g. ``open`` on macOS, ``xdg-open`` on Linux).

    The command string may carry arguments (``"firefox --new-tab"``); it
    is split with shell rules but never run through a shell.
    """

    def __init__(self, command: str) -> None:
        self._argv = shlex.split(command)
        if not self._argv:
            raise ValueError("goto command must not be empty")

    @property
    def command(self) -> str:
        return shlex.join(self._argv)

    async def open(self, link: str) -> None:
        argv = [*self._argv, link]
        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise GotoCommandError(
                f"{e}. Check the search.goto_cmd setting"
            ) from e

        _, stderr = await proc.communicate()
        if proc.returncode != 0:
            detail = stderr.decode(errors="replace").strip()
            raise GotoCommandError(
                f"{self._argv[0]} exited with status {proc.returncode}"
                + (f": {detail}" if detail else ""),
                returncode=proc.returncode,
            )
        log.debug("goto_opened", command=self._argv[0], link=link)
