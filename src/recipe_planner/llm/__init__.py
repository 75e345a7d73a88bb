"""
Recipe Planner - LLM Client.

Provides plain-text completion calls used by the AI extraction fallback.
"""

from recipe_planner.llm.client import complete_text, get_client, reset_client

__all__ = [
    "complete_text",
    "get_client",
    "reset_client",
]
