"""Running shell commands through bash."""

from __future__ import annotations

import os
import signal
import subprocess
import sys
from abc import ABC, abstractmethod

ASYNC_COMMANDS = ("idea", "code", "chrome", "open")

INTERACTIVE_COMMANDS = ("vim", "nano", "less", "more", "man", "ssh", "top", "htop", "nvim", "vi")


class CommandError(Exception):
    """Raised when a command fails; carries the output it produced."""

    def __init__(self, message: str, output: str = "", returncode: int | None = None) -> None:
        super().__init__(message)
        self.output = output
        self.returncode = returncode


def _exit_message(returncode: int) -> str:
    if returncode < 0:
        sig = -returncode
        name = signal.strsignal(sig) if hasattr(signal, "strsignal") else None
        return f"signal: {(name or str(sig)).lower()}"
    return f"exit status {returncode}"


def is_async_command(cmd: str) -> str | None:
    """Return the async command name the line starts with, or None."""
    fields = cmd.split()
    if fields and fields[0] in ASYNC_COMMANDS:
        return fields[0]
    return None


def is_interactive_command(cmd: str) -> bool:
    """Return True if the command line starts with a known terminal program."""
    return cmd.startswith(INTERACTIVE_COMMANDS)


class Executor(ABC):
    """Runs a command line and returns its output."""

    @abstractmethod
    def run_command(self, cmd: str) -> str:
        """Run the command and return its output, raising CommandError on failure."""


class BashExecutor(Executor):
    """Runs commands with ``bash -c``."""

    def run_command(self, cmd: str) -> str:
        return self.run_command_with_dir(cmd, "")

    def run_command_async_with_dir(self, cmd: str, directory: str | None) -> str:
        """Start the command without waiting for it and report the launch."""
        subprocess.Popen(["bash", "-c", cmd], cwd=directory or None)
        return f"[launched {cmd.split()[0]}]\n"

    def run_command_with_dir(self, cmd: str, directory: str | None) -> str:
        """Run the command in the directory and return its combined output."""
        if is_async_command(cmd):
            return self.run_command_async_with_dir(cmd, directory)
        if is_interactive_command(cmd):
            self._run_interactive(cmd, directory)
            return ""
        completed = subprocess.run(
            ["bash", "-c", cmd],
            cwd=directory or None,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
        )
        output = completed.stdout.decode("utf-8", errors="replace")
        if completed.returncode != 0:
            raise CommandError(
                _exit_message(completed.returncode), output, completed.returncode
            )
        return output

    def _run_interactive(self, cmd: str, directory: str | None) -> None:
        """Run the command attached to a pseudo-terminal wired to our terminal."""
        import fcntl
        import pty
        import select
        import termios
        import tty

        if directory and not os.path.isdir(directory):
            raise FileNotFoundError(f"chdir {directory}: no such file or directory")

        pid, master = pty.fork()
        if pid == 0:
            try:
                if directory:
                    os.chdir(directory)
                os.execvp("bash", ["bash", "-c", cmd])
            finally:
                os._exit(127)

        stdin_fd = sys.stdin.fileno()
        stdout_fd = sys.stdout.fileno()
        try:
            saved = termios.tcgetattr(stdin_fd)
        except termios.error as exc:
            os.close(master)
            os.kill(pid, signal.SIGKILL)
            os.waitpid(pid, 0)
            raise CommandError(f"cannot make terminal raw: {exc}") from exc

        def resize(*_: object) -> None:
            try:
                size = fcntl.ioctl(stdin_fd, termios.TIOCGWINSZ, b"\0" * 8)
                fcntl.ioctl(master, termios.TIOCSWINSZ, size)
            except OSError:
                pass

        previous_handler = None
        try:
            previous_handler = signal.signal(signal.SIGWINCH, resize)
        except ValueError:
            previous_handler = None
        resize()

        sys.stdout.flush()
        tty.setraw(stdin_fd)
        sources = [master, stdin_fd]
        try:
            while True:
                ready, _, _ = select.select(sources, [], [])
                if master in ready:
                    try:
                        data = os.read(master, 4096)
                    except OSError:
                        break
                    if not data:
                        break
                    _write_all(stdout_fd, data)
                if stdin_fd in ready:
                    data = os.read(stdin_fd, 4096)
                    if data:
                        _write_all(master, data)
                    else:
                        sources.remove(stdin_fd)
        finally:
            termios.tcsetattr(stdin_fd, termios.TCSAFLUSH, saved)
            if previous_handler is not None:
                signal.signal(signal.SIGWINCH, previous_handler)
            os.close(master)

        _, status = os.waitpid(pid, 0)
        returncode = os.waitstatus_to_exitcode(status)
        if returncode != 0:
            raise CommandError(_exit_message(returncode), "", returncode)


def _write_all(fd: int, data: bytes) -> None:
    view = memoryview(data)
    while view:
        written = os.write(fd, view)
        view = view[written:]