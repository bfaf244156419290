"""Release orchestration: bump the manifest, commit, tag and push.

A release is planned first (nothing is modified) and then run step by step.
The first failing step stops the run; steps already done are not undone.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from reltag.core.config import ReleaseConfig
from reltag.core.manifest import (
    read_manifest,
    read_version,
    replace_json_version_property,
    write_manifest,
)
from reltag.core.result import Err, Ok, Result
from reltag.core.semver import resolve_next_version
from reltag.git import release as git
from reltag.git.errors import GitError, describe_git_error
from reltag.output.console import ConsoleProtocol
from reltag.services.errors import ReleaseError

__all__ = ["ReleaseOutcome", "ReleasePlan", "plan_release", "run_release"]


@dataclass(frozen=True, slots=True)
class ReleasePlan:
    """Everything a release will do, computed before anything is touched."""

    project: Path
    manifest_path: Path
    manifest_content: str
    current_version: str
    next_version: str
    commit_label: str
    tag_label: str


@dataclass(frozen=True, slots=True)
class ReleaseOutcome:
    plan: ReleasePlan
    steps: tuple[str, ...]
    dry_run: bool = False


def _git_error(error: GitError) -> ReleaseError:
    return ReleaseError(kind="git", message=describe_git_error(error))


def plan_release(
    *,
    project: Path,
    config: ReleaseConfig,
    request: str,
) -> Result[ReleasePlan, ReleaseError]:
    """Check the environment and compute the next version.

    Args:
        project: Project root (git working directory, base of the manifest path)
        config: Release options
        request: `major`, `minor`, `patch` or an explicit `X.Y.Z` version
    """
    if not git.has_git_installed():
        return Err(
            ReleaseError(
                kind="git_missing",
                message="git is not installed",
                hint="Install git and make sure it is on PATH.",
            )
        )
    if not git.has_git_project(project):
        return Err(
            ReleaseError(
                kind="not_a_repo",
                message=f"not a git project: {project}",
                hint="Run reltag from a git working tree or pass --cwd.",
            )
        )

    manifest_path = project / config.manifest
    content = read_manifest(manifest_path)
    if isinstance(content, Err):
        return Err(ReleaseError(kind="manifest", message=content.error.message))

    current = read_version(content.value)
    if current is None:
        return Err(
            ReleaseError(
                kind="manifest",
                message=f"no version field in {manifest_path}",
            )
        )

    next_version = resolve_next_version(current, request)
    if next_version is None:
        return Err(
            ReleaseError(
                kind="version",
                message=f"cannot resolve version '{request}' from {current}",
                hint="Use major, minor, patch or an explicit X.Y.Z version.",
            )
        )

    return Ok(
        ReleasePlan(
            project=project,
            manifest_path=manifest_path,
            manifest_content=replace_json_version_property(content.value, next_version),
            current_version=current,
            next_version=next_version,
            commit_label=git.create_commit_label(next_version, config.commit_label),
            tag_label=git.create_tag_label(next_version, config.tag_label),
        )
    )


def run_release(
    *,
    plan: ReleasePlan,
    config: ReleaseConfig,
    console: ConsoleProtocol,
    dry_run: bool = False,
) -> Result[ReleaseOutcome, ReleaseError]:
    """Apply a release plan.

    Order: write manifest, stage it, commit, tag, set upstream when missing,
    push. With dry_run, steps are only announced.
    """
    cwd = plan.project
    steps: list[str] = []

    def announce(step: str) -> None:
        steps.append(step)
        console.step(step)

    announce(f"write {config.manifest}: {plan.current_version} -> {plan.next_version}")
    if not dry_run:
        written = write_manifest(plan.manifest_path, plan.manifest_content)
        if isinstance(written, Err):
            return Err(ReleaseError(kind="manifest", message=written.error.message))

    announce(f"git add {config.manifest}")
    if not dry_run:
        added = git.add_file(config.manifest, cwd, console=console)
        if isinstance(added, Err):
            return Err(_git_error(added.error))

    if config.commit:
        announce(f"git commit: {plan.commit_label}")
        if not dry_run:
            committed = git.create_commit(
                plan.next_version, config.commit_label, cwd, console=console
            )
            if isinstance(committed, Err):
                return Err(_git_error(committed.error))

    if config.tag:
        announce(f"git tag: {plan.tag_label}")
        if not dry_run:
            tagged = git.create_tag(plan.next_version, config.tag_label, cwd, console=console)
            if isinstance(tagged, Err):
                return Err(_git_error(tagged.error))

    if config.push:
        pushed = _push(
            plan=plan, config=config, console=console, announce=announce, dry_run=dry_run
        )
        if isinstance(pushed, Err):
            return pushed

    return Ok(ReleaseOutcome(plan=plan, steps=tuple(steps), dry_run=dry_run))


def _push(
    *,
    plan: ReleasePlan,
    config: ReleaseConfig,
    console: ConsoleProtocol,
    announce: Callable[[str], None],
    dry_run: bool,
) -> Result[None, ReleaseError]:
    cwd = plan.project
    include_tags = config.push_tags and config.tag

    if config.upstream and not git.is_current_branch_upstream(cwd):
        announce("git push --set-upstream")
        if not dry_run:
            upstreamed = git.upstream_current_branch(cwd, console=console)
            if isinstance(upstreamed, Err):
                return Err(_git_error(upstreamed.error))

    announce("git push --tags" if include_tags else "git push")
    if not dry_run:
        pushed = git.push(include_tags, cwd, console=console)
        if isinstance(pushed, Err):
            return Err(_git_error(pushed.error))

    return Ok(None)
