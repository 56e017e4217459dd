"""Command-line entry point: run one command, or start the interactive shell."""

from __future__ import annotations

import os
import shlex
import signal
import sys
from contextlib import contextmanager
from typing import Iterator, Sequence

from binks.executor import BashExecutor
from binks.prompt import error_message
from binks.repl import run_repl
from binks.session import Session

_ENTER_ALT_SCREEN = "\x1b[?1049h"
_LEAVE_ALT_SCREEN = "\x1b[?1049l"


def _stdout_is_tty() -> bool:
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


def _write_escape(sequence: str, action: str) -> None:
    if not _stdout_is_tty():
        return
    try:
        sys.stdout.write(sequence)
        sys.stdout.flush()
    except OSError as exc:
        print(f"failed to {action} alt screen:", exc, file=sys.stderr)


def enable_alt_screen() -> None:
    """Switch a terminal to the alternate screen."""
    _write_escape(_ENTER_ALT_SCREEN, "enable")


def disable_alt_screen() -> None:
    """Switch a terminal back from the alternate screen."""
    _write_escape(_LEAVE_ALT_SCREEN, "disable")


def _leave_on_signal(signum: int, frame: object) -> None:
    disable_alt_screen()
    sys.stdout.flush()
    os._exit(1)


@contextmanager
def _alt_screen(enabled: bool) -> Iterator[None]:
    """Use the alternate screen for the duration, leaving it on signals too."""
    if not enabled:
        yield
        return
    enable_alt_screen()
    previous = {}
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            previous[sig] = signal.signal(sig, _leave_on_signal)
        except (ValueError, OSError):
            pass
    try:
        yield
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
        disable_alt_screen()
        print()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the arguments as one command, or start the shell when there are none."""
    args = list(sys.argv[1:] if argv is None else argv)
    alt_screen = os.environ.get("BINKS_ALT_SCREEN") == "1"
    with _alt_screen(alt_screen):
        if not args:
            try:
                run_repl(Session.create())
            except Exception as exc:
                sys.stderr.write(error_message(exc))
                return 1
            return 0

        command = shlex.join(args)
        try:
            output = BashExecutor().run_command(command)
        except Exception as exc:
            sys.stderr.write(error_message(exc))
            return 1
        sys.stdout.write(output)
        return 0


if __name__ == "__main__":
    sys.exit(main())