"""Exit codes for the reltag command line.

Each failure class of a release maps to one stable process exit status:
- 0: Success
- 1: User error (bad version request, invalid rc file)
- 2: Environment error (git missing, not inside a git project)
- 3: Git error (a git command failed, no branch or remote)
- 5: I/O error (manifest unreadable or unwritable)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes. Values are part of the CLI contract."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    GIT_ERROR = 3
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK

    @property
    def is_error(self) -> bool:
        return self != ErrorCode.OK
