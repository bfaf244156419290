"""Failure variants of git queries.

GitError is a closed union: match on the variant, never on a base class.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from reltag.platform.process import ProcessError

__all__ = [
    "GitError",
    "MultipleRemoteError",
    "NoBranchError",
    "NoRemoteError",
    "describe_git_error",
]


@dataclass(frozen=True)
class NoBranchError:
    message: ClassVar[str] = "No branch Git seems to be declared"

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class NoRemoteError:
    message: ClassVar[str] = "No remote Git seems to be declared"

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class MultipleRemoteError:
    message: ClassVar[str] = "Multiple remote Git have been detected"

    def __str__(self) -> str:
        return self.message


GitError = ProcessError | NoBranchError | NoRemoteError | MultipleRemoteError


def describe_git_error(error: GitError) -> str:
    """One-line, user-facing description of a git failure."""
    match error:
        case ProcessError(stderr=stderr):
            detail = stderr.strip().splitlines()
            return f"{error}: {detail[-1]}" if detail else str(error)
        case NoBranchError() | NoRemoteError() | MultipleRemoteError():
            return error.message
