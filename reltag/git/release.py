"""Git operations used by a release.

Each function builds one git command line, runs it through the process
runner, and interprets the output. They fall in three groups:

- checks (`has_git_installed`, `has_git_project`, `is_branch_upstream`,
  `is_current_branch_upstream`) return a bool and never fail;
- actions (`add_file`, `create_commit`, `create_tag`, `push`,
  `upstream_branch`) return Result[None, ProcessError];
- queries (`get_branch_name`, `get_remote_name`, ...) return a Result whose
  error is a GitError variant.

Every function accepts an optional working directory; None means the current
directory of the process.

Usage:
    match get_remote_name(project):
        case Ok(remote):
            print(f"pushing to {remote}")
        case Err(MultipleRemoteError()):
            print("pick a remote explicitly")
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from reltag.core.result import Err, Ok, Result
from reltag.git.errors import GitError, MultipleRemoteError, NoBranchError, NoRemoteError
from reltag.output.console import ConsoleProtocol
from reltag.platform.process import ProcessError
from reltag.platform.process import run as run_process

__all__ = [
    "add_file",
    "create_commit",
    "create_commit_label",
    "create_tag",
    "create_tag_label",
    "get_branch_name",
    "get_remote_name",
    "get_remote_name_list",
    "has_git_installed",
    "has_git_project",
    "is_branch_upstream",
    "is_current_branch_upstream",
    "push",
    "split_lines",
    "upstream_branch",
    "upstream_current_branch",
]

GIT = "git"

_VERSION_PLACEHOLDER = "%s"
_DOUBLE_QUOTE = '"'
_ESCAPED_DOUBLE_QUOTE = '\\"'


# -----------------------------------------------------------------------------
# Labels
# -----------------------------------------------------------------------------


def _render_label(version: str, label: str) -> str:
    # Substitute first so quotes around %s are escaped along with the rest
    return label.replace(_VERSION_PLACEHOLDER, version).replace(
        _DOUBLE_QUOTE, _ESCAPED_DOUBLE_QUOTE
    )


def create_commit_label(version: str, label: str | None = None) -> str:
    """Build the commit message for a release.

    Args:
        version: Released version, substituted for every `%s` in label.
        label: Message template; empty or None selects the default message.

    Returns:
        The message, with double quotes escaped for a quoted shell argument.
    """
    if label:
        return _render_label(version, label)
    return f"Release version: {version}"


def create_tag_label(version: str, label: str | None = None) -> str:
    """Build the tag name for a release (`v{version}` by default)."""
    if label:
        return _render_label(version, label)
    return f"v{version}"


# -----------------------------------------------------------------------------
# Output parsing
# -----------------------------------------------------------------------------


def split_lines(output: str) -> list[str]:
    """Split command output into lines.

    Only the empty entry left by a trailing terminator is dropped; blank lines
    inside the output are kept.
    """
    lines = output.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


# -----------------------------------------------------------------------------
# Checks
# -----------------------------------------------------------------------------


def has_git_installed() -> bool:
    return isinstance(run_process(f"{GIT} --help", True), Ok)


def has_git_project(cwd: Path | None = None) -> bool:
    return isinstance(run_process(f"{GIT} status --porcelain", True, cwd), Ok)


def is_current_branch_upstream(cwd: Path | None = None) -> bool:
    match get_branch_name(cwd):
        case Ok(branch_name):
            return is_branch_upstream(branch_name, cwd)
        case Err(_):
            return False


def is_branch_upstream(branch_name: str, cwd: Path | None = None) -> bool:
    """Check whether a remote branch `<remote>/<branch_name>` is listed.

    The remote branch listing and the remote name are queried concurrently.
    Any failure of either query yields False.
    """
    with ThreadPoolExecutor(max_workers=2) as executor:
        listing_future = executor.submit(run_process, f"{GIT} branch -rvv", True, cwd)
        remote_future = executor.submit(get_remote_name, cwd)
        listing = listing_future.result()
        remote = remote_future.result()

    match (listing, remote):
        case (Ok(output), Ok(remote_name)):
            remote_branch = f"{remote_name}/{branch_name}"
            return any(remote_branch in line for line in split_lines(output))
        case _:
            return False


# -----------------------------------------------------------------------------
# Queries
# -----------------------------------------------------------------------------


def get_branch_name(cwd: Path | None = None) -> Result[str, GitError]:
    """Get the current branch name.

    Returns:
        Ok(branch) on success
        Err(NoBranchError) when git prints nothing
        Err(ProcessError) when the command fails
    """
    result = run_process(f"{GIT} rev-parse --abbrev-ref HEAD", True, cwd)
    match result:
        case Err(e):
            return Err(e)
        case Ok(""):
            return Err(NoBranchError())
        case Ok(branch):
            return Ok(branch)


def get_remote_name_list(cwd: Path | None = None) -> Result[list[str], ProcessError]:
    """List configured remotes in the order git prints them."""
    return run_process(f"{GIT} origin", True, cwd).map(split_lines)


def get_remote_name(cwd: Path | None = None) -> Result[str, GitError]:
    """Get the single configured remote.

    Returns:
        Ok(remote) when exactly one remote exists
        Err(MultipleRemoteError) when there are several
        Err(NoRemoteError) when there are none
        Err(ProcessError) when the listing command fails
    """
    result = get_remote_name_list(cwd)
    match result:
        case Err(e):
            return Err(e)
        case Ok([remote]):
            return Ok(remote)
        case Ok([]):
            return Err(NoRemoteError())
        case Ok(_):
            return Err(MultipleRemoteError())


# -----------------------------------------------------------------------------
# Actions
# -----------------------------------------------------------------------------


def _run_action(
    command: str,
    cwd: Path | None,
    console: ConsoleProtocol | None,
) -> Result[None, ProcessError]:
    return run_process(command, False, cwd, console=console).map(lambda _: None)


def add_file(
    file_path: str,
    cwd: Path | None = None,
    *,
    console: ConsoleProtocol | None = None,
) -> Result[None, ProcessError]:
    return _run_action(f"{GIT} add {file_path}", cwd, console)


def create_commit(
    version: str,
    label: str | None = None,
    cwd: Path | None = None,
    *,
    console: ConsoleProtocol | None = None,
) -> Result[None, ProcessError]:
    """Commit every tracked change with the release message."""
    message = create_commit_label(version, label)
    return _run_action(f'{GIT} commit --all --message "{message}"', cwd, console)


def create_tag(
    version: str,
    label: str | None = None,
    cwd: Path | None = None,
    *,
    console: ConsoleProtocol | None = None,
) -> Result[None, ProcessError]:
    """Tag HEAD with the release tag name."""
    tag = create_tag_label(version, label)
    return _run_action(f'{GIT} tag "{tag}"', cwd, console)


def push(
    include_tags: bool = False,
    cwd: Path | None = None,
    *,
    console: ConsoleProtocol | None = None,
) -> Result[None, ProcessError]:
    """Push commits, then tags as a second chained command if requested."""
    command = f"{GIT} push"
    if include_tags:
        command += f" && {GIT} push --tags"
    return _run_action(command, cwd, console)


def upstream_branch(
    remote_name: str,
    branch_name: str,
    cwd: Path | None = None,
    *,
    console: ConsoleProtocol | None = None,
) -> Result[None, ProcessError]:
    return _run_action(f"{GIT} push --set-upstream {remote_name} {branch_name}", cwd, console)


def upstream_current_branch(
    cwd: Path | None = None,
    *,
    console: ConsoleProtocol | None = None,
) -> Result[None, GitError]:
    """Push the current branch and track it on the only remote."""
    remote = get_remote_name(cwd)
    if isinstance(remote, Err):
        return remote

    branch = get_branch_name(cwd)
    if isinstance(branch, Err):
        return branch

    result = upstream_branch(remote.value, branch.value, cwd, console=console)
    if isinstance(result, Err):
        return Err(result.error)
    return Ok(None)
