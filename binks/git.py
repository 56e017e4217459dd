"""Reading the current git branch of a directory."""

from __future__ import annotations

import subprocess


def _git_output(cwd: str, *args: str) -> str | None:
    try:
        completed = subprocess.run(
            ["git", *args],
            cwd=cwd,
            stdin=subprocess.DEVNULL,
            capture_output=True,
        )
    except OSError:
        return None
    if completed.returncode != 0:
        return None
    return completed.stdout.decode("utf-8", errors="replace")


def trim_newline(s: str) -> str:
    """Remove one trailing newline and then one trailing carriage return."""
    if s.endswith("\n"):
        s = s[:-1]
    if s.endswith("\r"):
        s = s[:-1]
    return s


def get_git_branch(cwd: str) -> str:
    """Return the branch name, the short hash if detached, or '' outside a repository."""
    out = _git_output(cwd, "rev-parse", "--abbrev-ref", "HEAD")
    if out is None:
        return ""
    branch = trim_newline(out)
    if branch == "HEAD":
        short = _git_output(cwd, "rev-parse", "--short", "HEAD")
        if short is None:
            return "detached"
        return trim_newline(short)
    return branch