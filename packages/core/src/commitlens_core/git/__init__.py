from commitlens_core.git.repository import (
    GitError,
    amend_head_message,
    get_commit_files,
    get_head_message,
    get_hooks_dir,
    get_staged_files,
)

__all__ = [
    "GitError",
    "amend_head_message",
    "get_commit_files",
    "get_head_message",
    "get_hooks_dir",
    "get_staged_files",
]
