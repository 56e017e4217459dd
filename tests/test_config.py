import pytest

from binks.config import ColorConfig, get_color, load_color_config, read_config_file


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    for name in ("BINKS_PROMPT_COLOR", "BINKS_BRANCH_COLOR", "BINKS_ERROR_COLOR"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


@pytest.mark.parametrize(
    "name, expected",
    [
        ("red", "\x1b[31m"),
        ("cyan", "\x1b[36m"),
        ("CYAN", "\x1b[36m"),
        ("\x1b[35m", "\x1b[35m"),
        ("notacolor", ""),
    ],
)
def test_get_color(name, expected):
    assert get_color(name) == expected


def test_env_override(home, monkeypatch):
    monkeypatch.setenv("BINKS_PROMPT_COLOR", "yellow")
    monkeypatch.setenv("BINKS_BRANCH_COLOR", "blue")
    monkeypatch.setenv("BINKS_ERROR_COLOR", "green")
    assert load_color_config() == ColorConfig("yellow", "blue", "green")


def test_defaults_without_file(home):
    assert load_color_config() == ColorConfig("cyan", "magenta", "red")


def test_missing_file(home):
    assert read_config_file() == ColorConfig()


def test_invalid_yaml(home):
    (home / ".binks.yaml").write_text("not: [valid: yaml")
    assert read_config_file() == ColorConfig()


def test_valid_file(home):
    (home / ".binks.yaml").write_text("colors:\n  prompt_color: green\n  error_color: yellow\n")
    assert read_config_file() == ColorConfig(prompt_color="green", error_color="yellow")


def test_file_then_env(home, monkeypatch):
    (home / ".binks.yaml").write_text("colors:\n  prompt_color: green\n  branch_color: white\n")
    monkeypatch.setenv("BINKS_BRANCH_COLOR", "blue")
    assert load_color_config() == ColorConfig("green", "blue", "red")