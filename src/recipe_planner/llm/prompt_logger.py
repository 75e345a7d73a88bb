"""
Recipe Planner - Prompt Logger.

Writes each AI extraction call (prompt, raw reply or error) to a markdown
file under prompt_logs/<session>/ so extraction failures can be replayed
by hand. Off unless settings.log_prompts is set (LOG_PROMPTS=1) or the
CLI passes --log-prompts.
"""

from datetime import datetime
from pathlib import Path

from recipe_planner.config import settings

LOG_DIR = Path("prompt_logs")

# Prompts are mostly page HTML; only the head is useful when reading a log
MAX_LOGGED_PROMPT_CHARS = 20_000

_override: bool | None = None
_session_dir: Path | None = None
_calls = 0


def enable_prompt_logging(enabled: bool = True) -> None:
    """Force prompt logging on or off, overriding settings.log_prompts."""
    global _override
    _override = enabled


def is_prompt_logging_enabled() -> bool:
    if _override is not None:
        return _override
    return settings.log_prompts


def _session() -> Path:
    global _session_dir
    if _session_dir is None:
        _session_dir = LOG_DIR / datetime.now().strftime("%Y%m%d_%H%M%S")
    _session_dir.mkdir(parents=True, exist_ok=True)
    return _session_dir


def _clip(prompt: str) -> str:
    extra = len(prompt) - MAX_LOGGED_PROMPT_CHARS
    if extra <= 0:
        return prompt
    return f"{prompt[:MAX_LOGGED_PROMPT_CHARS]}\n... ({extra} chars omitted)"


def _render(node, model, prompt, max_tokens, response_text, error) -> str:
    if error:
        outcome = f"**ERROR:** {error}"
    elif response_text is not None:
        outcome = f"```\n{response_text}\n```"
    else:
        outcome = "(no response)"

    return "\n".join([
        f"# {node}",
        "",
        "| | |",
        "|---|---|",
        f"| time | {datetime.now().isoformat(timespec='seconds')} |",
        f"| model | {model} |",
        f"| max_tokens | {max_tokens} |",
        f"| prompt chars | {len(prompt)} |",
        "",
        "## Prompt",
        "",
        "```",
        _clip(prompt),
        "```",
        "",
        "## Response",
        "",
        outcome,
        "",
    ])


def log_prompt(
    *,
    node: str,
    model: str,
    prompt: str,
    max_tokens: int,
    response_text: str | None = None,
    error: str | None = None,
) -> Path | None:
    """
    Record one completion call.

    Files are numbered in call order within the session: 01_html_recipe.md,
    02_pdf_recipes.md, ...

    Returns:
        The file written, or None when logging is off
    """
    if not is_prompt_logging_enabled():
        return None

    global _calls
    _calls += 1

    path = _session() / f"{_calls:02d}_{node}.md"
    path.write_text(
        _render(node, model, prompt, max_tokens, response_text, error),
        encoding="utf-8",
    )
    return path


def get_session_log_dir() -> Path | None:
    """This run's log directory, or None when logging is off."""
    if not is_prompt_logging_enabled():
        return None
    return _session()


def reset_session() -> None:
    """Start a fresh session directory and call count."""
    global _session_dir, _calls, _override
    _session_dir = None
    _calls = 0
    _override = None
