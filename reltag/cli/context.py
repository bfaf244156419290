from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from reltag.core.config import RC_FILENAME, ReleaseConfig, load_config
from reltag.core.errors import ErrorCode
from reltag.core.result import Err
from reltag.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    cwd: Path | None
    config: ReleaseConfig
    console: ConsoleProtocol

    @property
    def project(self) -> Path:
        """Project root: the --cwd option, or the current directory."""
        return self.cwd if self.cwd is not None else Path.cwd()


def build_context(cwd: Path | None = None) -> CLIContext:
    console = RichConsole()
    root = cwd if cwd is not None else Path.cwd()
    rc_path = root / RC_FILENAME

    config = ReleaseConfig()
    if rc_path.exists():
        config_result = load_config(rc_path)
        if isinstance(config_result, Err):
            console.error(config_result.error.message)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        config = config_result.value

    return CLIContext(cwd=cwd, config=config, console=console)
