"""Building the shell prompt and coloured error messages."""

from __future__ import annotations

import re
import sys
from pathlib import Path

from binks.config import get_color, load_color_config
from binks.git import get_git_branch

RESET_COLOR = "\x1b[0m"

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")

color_config = load_color_config()


def _home_dir() -> str:
    try:
        return str(Path.home())
    except (RuntimeError, KeyError):
        return ""


def _short_cwd(cwd: str) -> str:
    home = _home_dir()
    if home and cwd.startswith(home):
        return "~" + cwd[len(home):]
    return cwd


def strip_ansi(s: str) -> str:
    """Remove ANSI colour escape codes from a string."""
    return _ANSI_RE.sub("", s)


def format_prompt(cwd: str) -> str:
    """Return the coloured prompt, with ~ for the home directory and the git branch."""
    branch = get_git_branch(cwd)
    text = get_color(color_config.prompt_color) + "binks:" + _short_cwd(cwd)
    if branch:
        text += " " + get_color(color_config.branch_color) + "(" + branch + ")" + RESET_COLOR
    return text + " > " + RESET_COLOR + " "


def error_message(err: BaseException | str) -> str:
    """Return a coloured 'Error: ...' line for the given error."""
    return get_color(color_config.error_color) + "Error: " + str(err) + RESET_COLOR + "\n"


def plain_prompt(cwd: str) -> str:
    """Return the prompt without colour codes."""
    return "binks:" + _short_cwd(cwd) + " > "


def _stdout_is_tty() -> bool:
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


def prompt(cwd: str) -> str:
    """Return the prompt, coloured when standard output is a terminal."""
    if _stdout_is_tty():
        return format_prompt(cwd)
    return plain_prompt(cwd)