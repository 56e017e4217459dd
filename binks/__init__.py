"""An interactive bash-backed shell with git-aware prompts and AI command suggestions."""

__version__ = "0.1.0"
__all__ = ["agent", "cli", "config", "executor", "git", "prompt", "repl", "session"]