"""Info command - show what git reports for the project."""

from __future__ import annotations

from pathlib import Path

import typer

from reltag.cli.context import build_context
from reltag.core.errors import ErrorCode
from reltag.core.result import Err, Ok
from reltag.git import release as git
from reltag.git.errors import describe_git_error
from reltag.output.console import Style


def info(
    cwd: Path | None = typer.Option(None, "--cwd", help="Project directory (default: current)"),
) -> None:
    """Show git availability, branch, remote and upstream state."""
    ctx = build_context(cwd)
    console = ctx.console

    if not git.has_git_installed():
        console.error("git: not installed")
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
    console.success("git: installed")

    if not git.has_git_project(cwd):
        console.error("not a git project")
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    match git.get_branch_name(cwd):
        case Ok(branch):
            console.print(f"branch: {branch}")
        case Err(e):
            console.warning(f"branch: {describe_git_error(e)}")

    match git.get_remote_name_list(cwd):
        case Ok(remotes) if remotes:
            console.print(f"remotes: {', '.join(remotes)}")
        case Ok(_):
            console.print("remotes: none", Style.DIM)
        case Err(e):
            console.warning(f"remotes: {describe_git_error(e)}")

    if git.is_current_branch_upstream(cwd):
        console.success("upstream: tracked")
    else:
        console.print("upstream: not tracked", Style.DIM)
