"""Git operations module.

Usage:
    from reltag.git import create_tag, get_remote_name, has_git_project

    if has_git_project(project):
        create_tag("1.2.3", cwd=project)
"""

from reltag.git.errors import (
    GitError,
    MultipleRemoteError,
    NoBranchError,
    NoRemoteError,
    describe_git_error,
)
from reltag.git.release import (
    add_file,
    create_commit,
    create_commit_label,
    create_tag,
    create_tag_label,
    get_branch_name,
    get_remote_name,
    get_remote_name_list,
    has_git_installed,
    has_git_project,
    is_branch_upstream,
    is_current_branch_upstream,
    push,
    split_lines,
    upstream_branch,
    upstream_current_branch,
)

__all__ = [
    # Errors
    "GitError",
    "MultipleRemoteError",
    "NoBranchError",
    "NoRemoteError",
    "describe_git_error",
    # Operations
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
