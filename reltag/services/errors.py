"""Error payload of a release run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal["git_missing", "not_a_repo", "manifest", "version", "git"]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Failure of a release, ready to be rendered by the CLI."""

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message
