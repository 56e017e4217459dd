"""Shell session state: working directory, command execution and AI suggestions."""

from __future__ import annotations

import os
import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from binks.agent import AI_PREFIX, Agent, DummyAgent, OpenAIAgent, is_ai_query
from binks.executor import BashExecutor, Executor

AI_CONFIRM_SIGNAL = "[AI]"
AI_CANCELLED = "[AI] Cancelled."

_CODE_BLOCK_RE = re.compile(r"```(?:[a-zA-Z]+)?\n(.*?)```", re.DOTALL)


def parse_ai_suggestion(resp: str) -> tuple[str, str]:
    """Split an AI reply into (explanation, first code block command)."""
    resp = resp.replace("\r\n", "\n")
    match = _CODE_BLOCK_RE.search(resp)
    if match is None:
        return resp, ""
    command = match.group(1).strip()
    explanation = _CODE_BLOCK_RE.sub("", resp).strip()
    return explanation, command


@dataclass
class PendingSuggestion:
    """An AI-suggested command awaiting the user's confirmation."""

    command: str
    explanation: str = ""
    raw: str = ""
    confirmed: bool = False
    declined: bool = False


@dataclass
class Session:
    """The state of one shell session."""

    executor: Executor | None = None
    agent: Agent | None = None
    cwd: str = "."
    ai_enabled: bool = False
    pending_suggestion: PendingSuggestion | None = None
    out: TextIO | None = None
    err: TextIO | None = None

    @classmethod
    def create(cls) -> "Session":
        """Start a session in the current directory with the default executor and agent."""
        try:
            cwd = os.getcwd()
        except OSError:
            cwd = "."
        agent: Agent
        if os.environ.get("OPENAI_API_KEY"):
            agent = OpenAIAgent.from_env()
        else:
            agent = DummyAgent()
        return cls(
            executor=BashExecutor(),
            agent=agent,
            cwd=cwd,
            ai_enabled=False,
            out=sys.stdout,
            err=sys.stderr,
        )

    def change_dir(self, path: str) -> None:
        """Change the working directory; '' and '~' mean home, '~x' is under home."""
        if path in ("", "~"):
            target = str(Path.home())
        elif path.startswith("~"):
            rest = path[1:].lstrip(os.sep)
            target = os.path.normpath(os.path.join(str(Path.home()), rest))
        else:
            target = path
        os.chdir(target)
        self.cwd = os.getcwd()

    def run_command(self, cmd: str) -> str:
        """Run a command in the session's working directory."""
        if self.executor is None:
            raise RuntimeError("no executor configured")
        if isinstance(self.executor, BashExecutor):
            return self.executor.run_command_with_dir(cmd, self.cwd)
        return self.executor.run_command(cmd)

    def execute_line(self, line: str) -> str:
        """Answer a pending suggestion, ask the agent, or run the line as a command.

        Returns "[AI]" when the agent suggested a command that now awaits
        confirmation. Errors from the agent or the command are raised.
        """
        trimmed = line.strip()
        if self.pending_suggestion is not None:
            answer = trimmed.lower()
            command = self.pending_suggestion.command
            self.pending_suggestion = None
            if answer in ("y", "yes"):
                return self.run_command(command)
            return AI_CANCELLED

        if is_ai_query(line) and self.agent is not None:
            if trimmed.startswith(AI_PREFIX):
                trimmed = trimmed[len(AI_PREFIX):].strip()
            try:
                resp = self.agent.respond(trimmed)
            except Exception:
                self.pending_suggestion = None
                raise
            explanation, command = parse_ai_suggestion(resp)
            if command:
                self.pending_suggestion = PendingSuggestion(
                    command=command, explanation=explanation, raw=resp
                )
                return AI_CONFIRM_SIGNAL
            return "[AI] " + resp

        return self.run_command(line)