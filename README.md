# binks

`binks` is a small interactive shell. It runs each line you type through
`bash -c`, keeps its own working directory, shows the current git branch in
its prompt, and can pass lines to an AI agent whose suggested commands you
confirm before they run.

## Installation

```
pip install .
```

## Command line

Start the interactive shell:

```
binks
```

Or run a single command through bash and exit:

```
binks echo "hello world"
```

The arguments are quoted and joined into one command line. Its combined
output is printed; if the command fails, an `Error:` message goes to standard
error and `binks` exits with status 1.

When standard input is a terminal, the shell uses line editing from Python's
`readline` module and keeps up to 100 entries of history in
`~/.binks_history`. Ctrl-D leaves the shell; Ctrl-C on an empty line leaves
it, on a partly typed line it discards the line. When standard input is not a
terminal (a pipe or a file), lines are read one by one and a prompt is printed
after each.

Set `BINKS_ALT_SCREEN=1` to run in the terminal's alternate screen.

### Built-in commands

- `cd <dir>` – change directory; `cd` and `cd ~` go to your home directory,
  `cd ~/path` to a path under it
- `exit`, `quit`, `:q` – leave the shell (case-insensitive)
- `help`, `?` – show the built-in help

Every other line is run as a bash command in the session's directory. A `cd`
run inside such a command does not change the session's directory. Lines
starting with `vim`, `vi`, `nvim`, `nano`, `less`, `more`, `man`, `ssh`, `top`
or `htop` are attached to a pseudo-terminal; lines whose first word is `code`,
`idea`, `chrome` or `open` are started in the background and report
`[launched <name>]`.

### Prompt and colours

The prompt is `binks:<dir> > `, with your home directory shown as `~`. On a
terminal it is coloured and followed by the git branch in parentheses (or the
short commit hash when HEAD is detached).

Colours are read from `~/.binks.yaml`:

```yaml
colors:
  prompt_color: cyan
  branch_color: magenta
  error_color: red
```

The environment variables `BINKS_PROMPT_COLOR`, `BINKS_BRANCH_COLOR` and
`BINKS_ERROR_COLOR` override the file. Colour names are `black`, `red`,
`green`, `yellow`, `blue`, `magenta`, `cyan`, `white` and `reset`; a raw ANSI
escape sequence starting with `ESC[` is used as given, and any other value
gives no colour.

## AI suggestions

A session has an agent and an `ai_enabled` switch, which is off by default.
With it on, every line other than the built-ins is sent to the agent; prefix
a line with `!` to run it as a shell command instead. If the agent's reply
contains a fenced code block, the text around it is shown, followed by
`AI suggests: <command>` and `Execute this? [y/N]:`. Answering `y` or `yes`
runs the command; anything else prints `[AI] Cancelled.`. A reply without a
code block is printed as it is.

`Session.create()` uses `OpenAIAgent` when `OPENAI_API_KEY` is set, and
`DummyAgent` (which answers `Echo: <prompt>`) otherwise.

| Variable          | Meaning                                   | Default                     |
|-------------------|-------------------------------------------|-----------------------------|
| `OPENAI_API_KEY`  | API key for the chat completions endpoint | unset                       |
| `OPENAI_MODEL`    | Model name                                | `gpt-3.5-turbo`             |
| `OPENAI_API_BASE` | Base URL of the API                       | `https://api.openai.com/v1` |
| `BINKS_DEBUG_AI`  | Set to `1` to log AI requests to stderr   | unset                       |

Requests time out after 15 seconds. Failures raise `binks.agent.AgentError`
with messages such as `AI request timed out` or `OpenAI API error: ...`.

## Library use

```python
from binks.agent import AgentFunc
from binks.repl import run_repl
from binks.session import Session

session = Session.create()
session.change_dir("/tmp")
print(session.run_command("ls"))

session.agent = AgentFunc(lambda prompt: "Try this:\n```sh\nls -la\n```")
session.ai_enabled = True
run_repl(session)
```

- `Session.run_command` returns the command's output and raises
  `binks.executor.CommandError` (with `output` and `returncode`) on failure.
- `Session.execute_line` answers a pending suggestion, asks the agent for a
  line starting with `>>`, or runs the line; it returns `"[AI]"` when a
  suggestion now awaits confirmation.
- `binks.session.parse_ai_suggestion` splits a reply into its explanation and
  the command in its first code block.
- `binks.repl.run_repl_non_interactive` and `binks.repl.run_repl_interactive`
  run the loop over any line iterable or `LineReader`, writing to the streams
  you pass.

## What it does not do

The `binks` command has no option to turn AI mode on; AI suggestions are only
available by setting `ai_enabled` on a `Session` from Python. Apart from the
colours, nothing is configurable from `~/.binks.yaml`. There are no pipes,
job control or aliases of its own: everything beyond `cd`, `exit` and `help`
is handed to bash.

## Running the tests

```
pip install ".[test]"
pytest
```