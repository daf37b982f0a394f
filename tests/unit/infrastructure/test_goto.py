"""Tests for CommandGotoAction."""

from __future__ import annotations

import shlex
import sys
from pathlib import Path

import pytest

from ferret.infrastructure.goto import CommandGotoAction, GotoCommandError

_PY = shlex.quote(sys.executable)


class TestCommandGotoAction:
    async def test_runs_command_with_link(self, tmp_path: Path) -> None:
        out = tmp_path / "opened.txt"
        script = f"import sys; open({str(out)!r}, 'w').write(sys.argv[1])"
        action = CommandGotoAction(f"{_PY} -c {shlex.quote(script)}")
        await action.open("https://example.com/a?b=c")
        assert out.read_text() == "https://example.com/a?b=c"

    async def test_non_zero_exit(self) -> None:
        script = "import sys; sys.stderr.write('no browser'); sys.exit(3)"
        action = CommandGotoAction(f"{_PY} -c {shlex.quote(script)}")
        with pytest.raises(GotoCommandError, match="no browser") as exc:
            await action.open("https://example.com")
        assert exc.value.returncode == 3

    async def test_missing_command(self) -> None:
        action = CommandGotoAction("ferret-no-such-command-xyz")
        with pytest.raises(GotoCommandError, match="goto_cmd"):
            await action.open("https://example.com")

    def test_empty_command_rejected(self) -> None:
        with pytest.raises(ValueError):
            CommandGotoAction("  ")

    def test_command_property(self) -> None:
        assert CommandGotoAction("xdg-open").command == "xdg-open"
