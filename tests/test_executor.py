import os

import pytest

from binks.executor import (
    BashExecutor,
    CommandError,
    is_async_command,
    is_interactive_command,
)


@pytest.fixture
def executor():
    return BashExecutor()


def test_simple_echo(executor):
    assert executor.run_command("echo hello") == "hello\n"


def test_nonexistent_command(executor):
    with pytest.raises(CommandError) as info:
        executor.run_command("nonexistentcommand12345")
    assert "exit status" in str(info.value)
    assert "not found" in info.value.output
    assert info.value.returncode == 127


def test_pipeline_with_arguments(executor):
    assert executor.run_command("echo 'hello world' | wc -w").strip() == "2"


def test_empty_command(executor):
    assert executor.run_command("") == ""


def test_env_expansion(executor, monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    output = executor.run_command("echo $HOME")
    assert output == f"{tmp_path}\n"


def test_exit_status_message(executor):
    with pytest.raises(CommandError) as info:
        executor.run_command("echo partial; exit 3")
    assert str(info.value) == "exit status 3"
    assert info.value.output == "partial\n"
    assert info.value.returncode == 3


def test_multiline_output(executor, tmp_path):
    names = ["file1.txt", "file2.txt", "file3.txt"]
    for name in names:
        (tmp_path / name).touch()
    output = executor.run_command(f"ls {tmp_path}")
    for name in names:
        assert name in output
    assert len(output.split("\n")) >= 3


def test_non_async_command_output(executor):
    assert executor.run_command("echo async-test") == "async-test\n"


@pytest.mark.parametrize(
    "cmd, expected",
    [
        ("idea .", "idea"),
        ("code .", "code"),
        ("chrome", "chrome"),
        ("open /Applications/Calculator.app", "open"),
        ("echo hello", None),
        ("sleep 1", None),
        ("", None),
    ],
)
def test_is_async_command(cmd, expected):
    assert is_async_command(cmd) == expected


def test_async_launch_message(executor, tmp_path):
    assert executor.run_command_async_with_dir("true", str(tmp_path)) == "[launched true]\n"


def test_run_with_dir(executor, tmp_path):
    assert executor.run_command_with_dir("echo hi", str(tmp_path)) == "hi\n"
    output = executor.run_command_with_dir("pwd -P", str(tmp_path))
    assert output.strip() == os.path.realpath(tmp_path)


def test_run_with_missing_dir(executor, tmp_path):
    with pytest.raises(OSError):
        executor.run_command_with_dir("echo hi", str(tmp_path / "missing"))


@pytest.mark.parametrize(
    "cmd, expected",
    [
        ("vim", True),
        ("vim file.txt", True),
        ("nano foo", True),
        ("less bar", True),
        ("ssh user@example.com", True),
        ("ls -l", False),
        ("echo hello", False),
        ("cat file", False),
        ("man ls", True),
        ("top", True),
        ("htop", True),
        ("nvim", True),
        ("vi", True),
    ],
)
def test_is_interactive_command(cmd, expected):
    assert is_interactive_command(cmd) is expected