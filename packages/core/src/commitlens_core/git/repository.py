"""Thin wrappers over the git commands commitlens needs.

The git operations used are the staged-file list, the file list of the
commit just made, the HEAD commit message, and a message-only amend of HEAD.
"""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)

# Set in the environment of the amend so hooks that call back into
# commitlens can detect the nested invocation and stop.
ACTIVE_ENV_VAR = "COMMITLENS_ACTIVE"


class GitError(RuntimeError):
    """A git command exited non-zero or could not be started."""

    def __init__(self, command: list[str], stderr: str):
        self.command = command
        self.stderr = stderr.strip()
        super().__init__(f"`{' '.join(command)}` failed: {self.stderr or 'no output'}")


def _run_git(args: list[str], cwd: str | None = None, input: str | None = None, env: dict | None = None) -> str:
    cmd = ["git", *args]
    logger.debug("Running %s", " ".join(cmd))
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            cwd=cwd,
            input=input,
            env=env,
        )
    except FileNotFoundError as e:
        raise GitError(cmd, f"git executable not found: {e}") from e
    if result.returncode != 0:
        raise GitError(cmd, result.stderr)
    return result.stdout


def get_staged_files(cwd: str | None = None) -> list[str]:
    """Return staged paths in git's order, excluding deletions."""
    out = _run_git(["diff", "--cached", "--name-only", "-z", "--diff-filter=ACMR"], cwd=cwd)
    return [path for path in out.split("\0") if path]


def get_commit_files(rev: str = "HEAD", cwd: str | None = None) -> list[str]:
    """Return the paths a commit added or changed, excluding deletions.

    Used from a post-commit hook, where the index already matches HEAD and the
    staged list is empty. ``--root`` makes the first commit list its files.
    """
    out = _run_git(
        ["diff-tree", "--root", "--no-commit-id", "--name-only", "-r", "-z", "--diff-filter=ACMR", rev],
        cwd=cwd,
    )
    return [path for path in out.split("\0") if path]


def get_head_message(cwd: str | None = None) -> str:
    """Return the full message of the most recent commit."""
    return _run_git(["log", "-1", "--pretty=%B"], cwd=cwd)


def amend_head_message(message: str, cwd: str | None = None) -> None:
    """Replace the HEAD commit message without touching its tree.

    ``--only`` with no paths keeps anything currently staged out of the
    amended commit; ``--no-verify`` skips pre-commit and commit-msg hooks.
    """
    env = {**os.environ, ACTIVE_ENV_VAR: "1"}
    _run_git(["commit", "--amend", "--only", "--no-verify", "-F", "-"], cwd=cwd, input=message, env=env)


def get_hooks_dir(cwd: str | None = None) -> str:
    """Return the hooks directory git uses for this repository."""
    path = _run_git(["rev-parse", "--git-path", "hooks"], cwd=cwd).strip()
    if cwd and not os.path.isabs(path):
        path = os.path.join(cwd, path)
    return path
