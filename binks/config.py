"""Colour settings from ~/.binks.yaml and the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path

import yaml


@dataclass(frozen=True)
class ColorConfig:
    """Colour names or ANSI codes for the prompt, branch and error text."""

    prompt_color: str = ""
    branch_color: str = ""
    error_color: str = ""


DEFAULT_COLORS = ColorConfig(prompt_color="cyan", branch_color="magenta", error_color="red")

COLOR_CODES = {
    "black": "\x1b[30m",
    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "magenta": "\x1b[35m",
    "cyan": "\x1b[36m",
    "white": "\x1b[37m",
    "reset": "\x1b[0m",
}

_FIELDS = {
    "prompt_color": "BINKS_PROMPT_COLOR",
    "branch_color": "BINKS_BRANCH_COLOR",
    "error_color": "BINKS_ERROR_COLOR",
}


def get_color(name: str) -> str:
    """Return the ANSI code for a colour name or code, or '' if unknown."""
    code = COLOR_CODES.get(name.lower())
    if code is not None:
        return code
    if name.startswith("\x1b["):
        return name
    return ""


def read_config_file() -> ColorConfig:
    """Read the colours section of ~/.binks.yaml; empty settings on any problem."""
    try:
        path = Path.home() / ".binks.yaml"
        text = path.read_text(encoding="utf-8")
    except (OSError, RuntimeError, UnicodeDecodeError):
        return ColorConfig()
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError:
        return ColorConfig()
    if data is None:
        return ColorConfig()
    if not isinstance(data, dict):
        return ColorConfig()
    colors = data.get("colors")
    if colors is None:
        return ColorConfig()
    if not isinstance(colors, dict):
        return ColorConfig()
    values: dict[str, str] = {}
    for field_name in _FIELDS:
        value = colors.get(field_name)
        if value is None:
            continue
        if isinstance(value, (dict, list)):
            return ColorConfig()
        values[field_name] = str(value)
    return ColorConfig(**values)


def load_color_config() -> ColorConfig:
    """Return the defaults, overridden by the config file, then by environment variables."""
    cfg = DEFAULT_COLORS
    file_cfg = read_config_file()
    for field_name, env_name in _FIELDS.items():
        from_file = getattr(file_cfg, field_name)
        if from_file:
            cfg = replace(cfg, **{field_name: from_file})
        from_env = os.environ.get(env_name, "")
        if from_env:
            cfg = replace(cfg, **{field_name: from_env})
    return cfg