"""Tests for reltag.services.release module."""

from __future__ import annotations

from pathlib import Path

import pytest

import reltag.git.release as release_ops
from reltag.core.config import ReleaseConfig
from reltag.core.result import Err, Ok, Result
from reltag.git.errors import GitError, NoRemoteError
from reltag.output.console import MockConsole, Style
from reltag.platform.process import ProcessError
from reltag.services.release import ReleasePlan, plan_release, run_release

PACKAGE_JSON = '{\n  "name": "my-app",\n  "version": "1.2.3"\n}\n'


class FakeGit:
    """Replaces the git operations used by the release service."""

    def __init__(self) -> None:
        self.installed = True
        self.project = True
        self.upstream = True
        self.calls: list[str] = []
        self.failures: dict[str, ProcessError] = {}
        self.upstream_error: GitError | None = None

    def install(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(release_ops, "has_git_installed", lambda: self.installed)
        monkeypatch.setattr(release_ops, "has_git_project", lambda cwd=None: self.project)
        monkeypatch.setattr(
            release_ops, "is_current_branch_upstream", lambda cwd=None: self.upstream
        )
        monkeypatch.setattr(release_ops, "add_file", self._action("add"))
        monkeypatch.setattr(release_ops, "create_commit", self._action("commit"))
        monkeypatch.setattr(release_ops, "create_tag", self._action("tag"))
        monkeypatch.setattr(release_ops, "push", self._action("push"))
        monkeypatch.setattr(release_ops, "upstream_current_branch", self._upstream)

    def _action(self, name: str):  # type: ignore[no-untyped-def]
        def action(*args: object, **kwargs: object) -> Result[None, ProcessError]:
            self.calls.append(f"{name}:{','.join(str(a) for a in args)}")
            failure = self.failures.get(name)
            return Err(failure) if failure is not None else Ok(None)

        return action

    def _upstream(self, cwd: Path | None = None, **kwargs: object) -> Result[None, GitError]:
        self.calls.append("upstream")
        if self.upstream_error is not None:
            return Err(self.upstream_error)
        return Ok(None)


@pytest.fixture
def fake_git(monkeypatch: pytest.MonkeyPatch) -> FakeGit:
    fake = FakeGit()
    fake.install(monkeypatch)
    return fake


@pytest.fixture
def project(tmp_path: Path) -> Path:
    (tmp_path / "package.json").write_text(PACKAGE_JSON, encoding="utf-8")
    return tmp_path


def _plan(project: Path, config: ReleaseConfig, request: str = "minor") -> ReleasePlan:
    result = plan_release(project=project, config=config, request=request)
    assert isinstance(result, Ok)
    return result.value


# =============================================================================
# plan_release
# =============================================================================


class TestPlanRelease:
    def test_plan_computes_versions_and_labels(self, fake_git: FakeGit, project: Path) -> None:
        plan = _plan(project, ReleaseConfig(commit_label='release "%s"'))

        assert plan.current_version == "1.2.3"
        assert plan.next_version == "1.3.0"
        assert plan.commit_label == 'release \\"1.3.0\\"'
        assert plan.tag_label == "v1.3.0"
        assert '"version": "1.3.0"' in plan.manifest_content
        assert plan.manifest_path == project / "package.json"

    def test_plan_does_not_touch_manifest(self, fake_git: FakeGit, project: Path) -> None:
        _plan(project, ReleaseConfig())
        assert (project / "package.json").read_text(encoding="utf-8") == PACKAGE_JSON

    def test_git_missing(self, fake_git: FakeGit, project: Path) -> None:
        fake_git.installed = False

        result = plan_release(project=project, config=ReleaseConfig(), request="patch")

        assert isinstance(result, Err)
        assert result.error.kind == "git_missing"

    def test_not_a_repo(self, fake_git: FakeGit, project: Path) -> None:
        fake_git.project = False

        result = plan_release(project=project, config=ReleaseConfig(), request="patch")

        assert isinstance(result, Err)
        assert result.error.kind == "not_a_repo"
        assert result.error.hint

    def test_missing_manifest(self, fake_git: FakeGit, tmp_path: Path) -> None:
        result = plan_release(project=tmp_path, config=ReleaseConfig(), request="patch")

        assert isinstance(result, Err)
        assert result.error.kind == "manifest"

    def test_manifest_without_version(self, fake_git: FakeGit, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text('{"name": "x"}', encoding="utf-8")

        result = plan_release(project=tmp_path, config=ReleaseConfig(), request="patch")

        assert isinstance(result, Err)
        assert result.error.kind == "manifest"

    def test_bad_version_request(self, fake_git: FakeGit, project: Path) -> None:
        result = plan_release(project=project, config=ReleaseConfig(), request="bigger")

        assert isinstance(result, Err)
        assert result.error.kind == "version"


# =============================================================================
# run_release
# =============================================================================


class TestRunRelease:
    def test_runs_steps_in_order(self, fake_git: FakeGit, project: Path) -> None:
        config = ReleaseConfig()
        plan = _plan(project, config)

        result = run_release(plan=plan, config=config, console=MockConsole())

        assert isinstance(result, Ok)
        assert [c.split(":")[0] for c in fake_git.calls] == ["add", "commit", "tag", "push"]
        assert fake_git.calls[0] == f"add:package.json,{project}"
        assert fake_git.calls[-1] == f"push:True,{project}"
        assert '"version": "1.3.0"' in (project / "package.json").read_text(encoding="utf-8")

    def test_sets_upstream_when_missing(self, fake_git: FakeGit, project: Path) -> None:
        fake_git.upstream = False
        config = ReleaseConfig()

        run_release(plan=_plan(project, config), config=config, console=MockConsole())

        assert [c.split(":")[0] for c in fake_git.calls] == [
            "add",
            "commit",
            "tag",
            "upstream",
            "push",
        ]

    def test_upstream_disabled(self, fake_git: FakeGit, project: Path) -> None:
        fake_git.upstream = False
        config = ReleaseConfig(upstream=False)

        run_release(plan=_plan(project, config), config=config, console=MockConsole())

        assert "upstream" not in fake_git.calls

    def test_upstream_failure_stops_before_push(self, fake_git: FakeGit, project: Path) -> None:
        fake_git.upstream = False
        fake_git.upstream_error = NoRemoteError()
        config = ReleaseConfig()

        result = run_release(plan=_plan(project, config), config=config, console=MockConsole())

        assert isinstance(result, Err)
        assert result.error.kind == "git"
        assert result.error.message == "No remote Git seems to be declared"
        assert not any(c.startswith("push") for c in fake_git.calls)

    def test_optional_steps_skipped(self, fake_git: FakeGit, project: Path) -> None:
        config = ReleaseConfig(commit=False, tag=False, push=False)

        result = run_release(plan=_plan(project, config), config=config, console=MockConsole())

        assert isinstance(result, Ok)
        assert [c.split(":")[0] for c in fake_git.calls] == ["add"]

    def test_tags_not_pushed_without_tag(self, fake_git: FakeGit, project: Path) -> None:
        config = ReleaseConfig(tag=False)

        run_release(plan=_plan(project, config), config=config, console=MockConsole())

        assert fake_git.calls[-1] == f"push:False,{project}"

    def test_first_failure_stops_run(self, fake_git: FakeGit, project: Path) -> None:
        fake_git.failures["tag"] = ProcessError(
            command='git tag "v1.3.0"',
            returncode=128,
            stdout="",
            stderr="fatal: tag 'v1.3.0' already exists\n",
        )
        config = ReleaseConfig()

        result = run_release(plan=_plan(project, config), config=config, console=MockConsole())

        assert isinstance(result, Err)
        assert result.error.kind == "git"
        assert "already exists" in result.error.message
        assert [c.split(":")[0] for c in fake_git.calls] == ["add", "commit", "tag"]
        # No rollback: the manifest keeps the new version
        assert '"version": "1.3.0"' in (project / "package.json").read_text(encoding="utf-8")

    def test_dry_run_changes_nothing(self, fake_git: FakeGit, project: Path) -> None:
        fake_git.upstream = False
        config = ReleaseConfig()
        console = MockConsole()

        result = run_release(
            plan=_plan(project, config), config=config, console=console, dry_run=True
        )

        assert isinstance(result, Ok)
        assert result.value.dry_run is True
        assert fake_git.calls == []
        assert (project / "package.json").read_text(encoding="utf-8") == PACKAGE_JSON
        assert console.count(Style.STEP) == len(result.value.steps) == 6
