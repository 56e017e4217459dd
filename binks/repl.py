"""The read-eval-print loop of the shell."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, TextIO

try:
    import readline as _readline
except ImportError:  # pragma: no cover - platforms without GNU readline
    _readline = None

from binks.agent import AI_PREFIX
from binks.git import trim_newline
from binks.prompt import RESET_COLOR, error_message, prompt
from binks.session import AI_CONFIRM_SIGNAL, Session

HISTORY_FILE_NAME = ".binks_history"
HISTORY_LIMIT = 100
EXIT_ALIASES = ("exit", "quit", ":q")

HELP_TEXT = """Built-in commands:
  cd <dir>    – Change directory
  exit        – Exit the shell
  help, ?     – Show this help message

AI queries: Start your input with '>>' to ask the AI agent (e.g., '>> how do I list files?').
All other input is executed as shell commands in your shell environment."""

_AI_STYLE = "\x1b[36;1m"


def _is_tty(stream: object) -> bool:
    try:
        return bool(stream.isatty())  # type: ignore[attr-defined]
    except (AttributeError, ValueError):
        return False


def _paint_ai(text: str) -> str:
    """Colour text bold cyan when standard output is a terminal."""
    if _is_tty(sys.stdout):
        return _AI_STYLE + text + RESET_COLOR
    return text


def _flush(stream: TextIO) -> None:
    flush = getattr(stream, "flush", None)
    if flush is not None:
        flush()


class LineReader(ABC):
    """A source of input lines for the interactive loop.

    ``readline`` raises EOFError at the end of input and KeyboardInterrupt
    when interrupted; the interrupt's first argument, if any, is the text
    typed so far.
    """

    @abstractmethod
    def readline(self) -> str:
        """Return the next line of input."""

    @abstractmethod
    def set_prompt(self, prompt: str) -> None:
        """Change the prompt shown before the next line."""

    @abstractmethod
    def close(self) -> None:
        """Release whatever the reader holds."""


class ReadlineReader(LineReader):
    """Line editing and history through the readline module."""

    def __init__(
        self,
        prompt_text: str = "",
        history_file: str | None = None,
        history_limit: int = HISTORY_LIMIT,
    ) -> None:
        self._prompt = prompt_text
        self._history_file = history_file
        if _readline is not None:
            _readline.set_history_length(history_limit)
            if history_file:
                try:
                    _readline.read_history_file(history_file)
                except OSError:
                    pass

    def readline(self) -> str:
        try:
            return input(self._prompt)
        except EOFError:
            sys.stdout.write("exit\n")
            _flush(sys.stdout)
            raise
        except KeyboardInterrupt:
            partial = _readline.get_line_buffer() if _readline is not None else ""
            sys.stdout.write("^C\n")
            _flush(sys.stdout)
            raise KeyboardInterrupt(partial) from None

    def set_prompt(self, prompt: str) -> None:
        self._prompt = prompt

    def close(self) -> None:
        if _readline is not None and self._history_file:
            try:
                _readline.write_history_file(self._history_file)
            except OSError:
                pass


def prompt_with_ai(cwd: str, ai_enabled: bool) -> str:
    """Return the prompt, marked with [AI] when AI mode is on."""
    if ai_enabled:
        text = f"[AI] binks:{cwd} > "
        if _is_tty(sys.stdout):
            return _AI_STYLE + text + RESET_COLOR
        return text
    return prompt(cwd)


def is_exit(line: str) -> bool:
    """Return True for the exit commands, ignoring case and surrounding space."""
    return line.strip().lower() in EXIT_ALIASES


def print_help(out: TextIO) -> None:
    """Write the built-in help text."""
    try:
        out.write(HELP_TEXT + "\n")
    except OSError as exc:
        print("failed to print help:", exc, file=sys.stderr)


def _run_and_print(session: Session, cmd: str, out: TextIO, err_out: TextIO) -> None:
    try:
        output = session.run_command(cmd)
    except Exception as exc:
        err_out.write(error_message(exc))
        return
    if output:
        out.write(output)
        if not output.endswith("\n"):
            out.write("\n")


def _answer_suggestion(line: str, session: Session, out: TextIO, err_out: TextIO) -> None:
    suggestion = session.pending_suggestion
    assert suggestion is not None
    answer = line.strip().lower()
    if answer in ("y", "yes"):
        suggestion.confirmed = True
        session.pending_suggestion = None
        try:
            output = session.run_command(suggestion.command)
        except Exception as exc:
            err_out.write(_paint_ai(f"[AI] error: {exc}\n"))
            return
        if output:
            out.write(_paint_ai(f"{output}\n"))
    else:
        suggestion.declined = True
        out.write(_paint_ai("[AI] Cancelled.\n"))
        session.pending_suggestion = None


def _ask_agent(line: str, session: Session, out: TextIO, err_out: TextIO) -> None:
    try:
        resp = session.execute_line(AI_PREFIX + line)
    except Exception as exc:
        err_out.write(_paint_ai(f"[AI] error: {exc}\n"))
        session.pending_suggestion = None
        return
    suggestion = session.pending_suggestion
    if resp == AI_CONFIRM_SIGNAL and suggestion is not None:
        if suggestion.explanation:
            out.write(f"[AI] {suggestion.explanation}\n")
        out.write(f"AI suggests: {suggestion.command}\n")
        out.write("Execute this? [y/N]: ")
    else:
        out.write(f"{resp[5:]}\n")


def process_repl_line(line: str, session: Session, out: TextIO, err_out: TextIO) -> bool:
    """Handle one input line; return True when the loop should stop."""
    line = line.strip()
    if is_exit(line):
        return True
    if line.startswith("cd"):
        target = " ".join(line.split()[1:])
        try:
            session.change_dir(target.strip())
        except Exception as exc:
            err_out.write(error_message(exc))
        return False
    if line in ("help", "?"):
        print_help(out)
        return False
    if session.pending_suggestion is not None:
        _answer_suggestion(line, session, out, err_out)
        return False
    if not line:
        return False
    if session.ai_enabled and session.agent is not None:
        if line.startswith("!"):
            _run_and_print(session, line[1:].strip(), out, err_out)
        else:
            _ask_agent(line, session, out, err_out)
        return False
    _run_and_print(session, line, out, err_out)
    return False


def run_repl_non_interactive(
    session: Session, stream: Iterable[str], out: TextIO, err_out: TextIO
) -> None:
    """Run the loop over lines from a stream, printing a prompt after each."""
    out.write(prompt_with_ai(session.cwd, session.ai_enabled))
    _flush(out)
    for raw in stream:
        done = process_repl_line(trim_newline(raw), session, out, err_out)
        out.write(prompt_with_ai(session.cwd, session.ai_enabled))
        _flush(out)
        if done:
            break


def run_repl_interactive(
    session: Session, reader: LineReader, out: TextIO, err_out: TextIO
) -> None:
    """Run the loop over a line reader until exit, end of input or an empty interrupt."""
    try:
        while True:
            try:
                line = reader.readline()
            except EOFError:
                break
            except KeyboardInterrupt as interrupt:
                partial = interrupt.args[0] if interrupt.args else ""
                if not partial:
                    break
                continue
            done = process_repl_line(line, session, out, err_out)
            reader.set_prompt(prompt_with_ai(session.cwd, session.ai_enabled))
            if done:
                break
    finally:
        reader.close()


def run_repl(session: Session) -> None:
    """Run the loop on the standard streams, with line editing on a terminal."""
    if _is_tty(sys.stdin):
        try:
            home = Path.home()
        except (RuntimeError, KeyError) as exc:
            raise RuntimeError(f"failed to get user home directory: {exc}") from exc
        reader = ReadlineReader(
            prompt_with_ai(session.cwd, session.ai_enabled),
            history_file=str(home / HISTORY_FILE_NAME),
            history_limit=HISTORY_LIMIT,
        )
        run_repl_interactive(session, reader, sys.stdout, sys.stderr)
        return
    run_repl_non_interactive(session, sys.stdin, sys.stdout, sys.stderr)