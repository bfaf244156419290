"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import NoReturn

import typer

from reltag.core.errors import ErrorCode
from reltag.output.console import ConsoleProtocol, Style
from reltag.services.errors import ReleaseError, ReleaseErrorKind

_EXIT_CODES: dict[ReleaseErrorKind, ErrorCode] = {
    "git_missing": ErrorCode.ENV_ERROR,
    "not_a_repo": ErrorCode.ENV_ERROR,
    "manifest": ErrorCode.IO_ERROR,
    "version": ErrorCode.USER_ERROR,
    "git": ErrorCode.GIT_ERROR,
}


def release_error_code(error: ReleaseError) -> ErrorCode:
    return _EXIT_CODES.get(error.kind, ErrorCode.USER_ERROR)


def exit_release_error(error: ReleaseError, console: ConsoleProtocol) -> NoReturn:
    """Print a release error with its hint and exit with the mapped code."""
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)
    raise typer.Exit(code=int(release_error_code(error)))
