from __future__ import annotations

from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from reltag import __version__
from reltag.cli.app import app
from reltag.cli.context import build_context
from reltag.core.config import RC_FILENAME
from reltag.core.errors import ErrorCode

runner = CliRunner()


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_commands_registered() -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "bump" in result.output
    assert "info" in result.output


def test_build_context_reads_rc_file(tmp_path: Path) -> None:
    (tmp_path / RC_FILENAME).write_text('tag_label = "release-%s"\n', encoding="utf-8")

    ctx = build_context(tmp_path)

    assert ctx.config.tag_label == "release-%s"
    assert ctx.project == tmp_path


def test_build_context_without_rc_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    ctx = build_context()

    assert ctx.cwd is None
    assert ctx.config.manifest == "package.json"


def test_build_context_invalid_rc_file(tmp_path: Path) -> None:
    (tmp_path / RC_FILENAME).write_text("push = [", encoding="utf-8")

    with pytest.raises(typer.Exit) as exc:
        build_context(tmp_path)

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)


def test_build_context_unreadable_rc_file(tmp_path: Path) -> None:
    (tmp_path / RC_FILENAME).mkdir()

    with pytest.raises(typer.Exit) as exc:
        build_context(tmp_path)

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)
