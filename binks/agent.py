"""Agents that answer prompts, and detection of AI queries."""

from __future__ import annotations

import json
import os
import socket
import sys
import urllib.error
import urllib.request
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable

AI_PREFIX = ">>"

DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_BASE_URL = "https://api.openai.com/v1"
REQUEST_TIMEOUT = 15.0

Transport = Callable[[urllib.request.Request, float], bytes]


class AgentError(Exception):
    """Raised when an agent cannot produce a reply."""


def is_ai_query(line: str) -> bool:
    """Return True if the line starts with the AI prefix and has content after it."""
    trimmed = line.strip()
    if not trimmed.startswith(AI_PREFIX):
        return False
    return trimmed[len(AI_PREFIX):].strip() != ""


class Agent(ABC):
    """Something that answers a prompt with text."""

    @abstractmethod
    def respond(self, prompt: str) -> str:
        """Return the reply to the prompt, or raise AgentError."""


class AgentFunc(Agent):
    """An agent backed by a plain callable."""

    def __init__(self, func: Callable[[str], str]) -> None:
        self._func = func

    def respond(self, prompt: str) -> str:
        return self._func(prompt)


class DummyAgent(Agent):
    """An agent that echoes the prompt back."""

    def respond(self, prompt: str) -> str:
        return f"Echo: {prompt}"


def _urlopen_transport(request: urllib.request.Request, timeout: float) -> bytes:
    """Send a request with urllib and return the body, even for HTTP error statuses."""
    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:
            return response.read()
    except urllib.error.HTTPError as exc:
        try:
            return exc.read()
        finally:
            exc.close()


def _is_timeout(exc: BaseException) -> bool:
    if isinstance(exc, (TimeoutError, socket.timeout)):
        return True
    if isinstance(exc, urllib.error.URLError):
        return isinstance(exc.reason, (TimeoutError, socket.timeout))
    return "timed out" in str(exc)


def _extract_reply(body: bytes) -> str:
    try:
        data = json.loads(body)
    except (ValueError, UnicodeDecodeError) as exc:
        raise AgentError("AI error: failed to parse response") from exc
    try:
        if not isinstance(data, dict):
            raise TypeError("response is not an object")
        error = data.get("error")
        if error is not None:
            message = error.get("message") or ""
            raise AgentError(f"OpenAI API error: {message}")
        choices = data.get("choices") or []
        if not choices:
            raise AgentError("AI error: no response from model")
        message = choices[0].get("message") or {}
        content = message.get("content") or ""
        if not isinstance(content, str):
            raise TypeError("content is not a string")
    except (AttributeError, TypeError) as exc:
        raise AgentError("AI error: failed to parse response") from exc
    return content.rstrip("\n\r ")


@dataclass
class OpenAIAgent(Agent):
    """An agent that asks an OpenAI-compatible chat completions endpoint."""

    api_key: str = ""
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    transport: Transport = field(default=_urlopen_transport, repr=False)
    timeout: float = REQUEST_TIMEOUT

    @classmethod
    def from_env(cls) -> "OpenAIAgent":
        """Build an agent from OPENAI_API_KEY, OPENAI_MODEL and OPENAI_API_BASE."""
        return cls(
            api_key=os.environ.get("OPENAI_API_KEY", ""),
            model=os.environ.get("OPENAI_MODEL") or DEFAULT_MODEL,
            base_url=os.environ.get("OPENAI_API_BASE") or DEFAULT_BASE_URL,
        )

    def respond(self, prompt: str) -> str:
        debug = os.environ.get("BINKS_DEBUG_AI") == "1"
        if debug:
            print(f"[OpenAIAgent] Received prompt: {json.dumps(prompt)}", file=sys.stderr)
        if not self.api_key:
            raise AgentError("AI is not configured. Set OPENAI_API_KEY environment variable")

        url = self.base_url + "/chat/completions"
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
        }
        body = json.dumps(payload).encode("utf-8")
        if debug:
            print(
                f"[OpenAIAgent] Sending request to {url}: {body.decode('utf-8')}",
                file=sys.stderr,
            )
        request = urllib.request.Request(
            url,
            data=body,
            method="POST",
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
        )
        try:
            raw = self.transport(request, self.timeout)
        except Exception as exc:
            if _is_timeout(exc):
                raise AgentError("AI request timed out") from exc
            raise AgentError(f"AI error: {exc}") from exc
        if debug:
            print(
                f"[OpenAIAgent] Raw response: {raw.decode('utf-8', errors='replace')}",
                file=sys.stderr,
            )
        return _extract_reply(raw)