"""Bump command - bump the manifest version, commit, tag and push."""

from __future__ import annotations

from pathlib import Path

import typer

from reltag.cli.commands._helpers import exit_release_error
from reltag.cli.context import build_context
from reltag.core.result import Err
from reltag.output.console import Style
from reltag.services.release import plan_release, run_release


def bump(
    version: str = typer.Argument(..., help="major, minor, patch or an explicit X.Y.Z"),
    cwd: Path | None = typer.Option(None, "--cwd", help="Project directory (default: current)"),
    manifest: str | None = typer.Option(None, "--manifest", help="JSON file holding the version"),
    commit_label: str | None = typer.Option(
        None, "--commit-label", help="Commit message, %s is replaced by the version"
    ),
    tag_label: str | None = typer.Option(
        None, "--tag-label", help="Tag name, %s is replaced by the version"
    ),
    commit: bool | None = typer.Option(None, "--commit/--no-commit", help="Create a commit"),
    tag: bool | None = typer.Option(None, "--tag/--no-tag", help="Create a tag"),
    push: bool | None = typer.Option(None, "--push/--no-push", help="Push to the remote"),
    push_tags: bool | None = typer.Option(
        None, "--push-tags/--no-push-tags", help="Push tags along with commits"
    ),
    upstream: bool | None = typer.Option(
        None, "--upstream/--no-upstream", help="Set upstream tracking when missing"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Only show what would be done"),
) -> None:
    """Release a new version of the project."""
    ctx = build_context(cwd)
    config = ctx.config.merged(
        manifest=manifest,
        commit_label=commit_label,
        tag_label=tag_label,
        commit=commit,
        tag=tag,
        push=push,
        push_tags=push_tags,
        upstream=upstream,
    )

    planned = plan_release(project=ctx.project, config=config, request=version)
    if isinstance(planned, Err):
        exit_release_error(planned.error, ctx.console)
    plan = planned.value

    ctx.console.header(f"Release {plan.current_version} -> {plan.next_version}")
    if dry_run:
        ctx.console.print("dry run: nothing will be changed", Style.DIM)

    outcome = run_release(plan=plan, config=config, console=ctx.console, dry_run=dry_run)
    if isinstance(outcome, Err):
        exit_release_error(outcome.error, ctx.console)

    if dry_run:
        ctx.console.info(f"{len(outcome.value.steps)} step(s) planned")
    else:
        ctx.console.success(f"released {plan.tag_label}")
