"""
Pytest configuration and fixtures for Recipe Planner tests.
"""

import json
import os
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

# Set test environment before importing recipe_planner modules
os.environ["APP_ENV"] = "development"
os.environ.setdefault("OPENAI_API_KEY", "test-key-not-real")
os.environ["LOG_PROMPTS"] = "0"

from recipe_planner import config
from recipe_planner.config import Settings
from recipe_planner.llm import client as llm_client


def make_settings(**overrides) -> Settings:
    """Settings isolated from any local .env file."""
    values = {"openai_api_key": "test-key-not-real"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture(autouse=True)
def test_settings(monkeypatch):
    """Every test runs against fresh, .env-independent settings."""
    settings = make_settings()
    monkeypatch.setattr(config.settings, "_instance", settings)
    monkeypatch.setattr(llm_client, "_client", None)
    return settings


@pytest.fixture
def fake_llm(monkeypatch):
    """
    Replace the OpenAI client with a mock.

    Set the model's reply with fake_llm.reply("...") or fake_llm.reply_json({...});
    inspect calls through fake_llm.create.
    """
    fake = MagicMock()
    fake.create = AsyncMock()
    fake.chat.completions.create = fake.create

    def reply(text: str) -> None:
        completion = MagicMock()
        completion.choices = [MagicMock(message=MagicMock(content=text))]
        fake.create.return_value = completion

    def reply_json(data) -> None:
        reply(json.dumps(data))

    fake.reply = reply
    fake.reply_json = reply_json

    monkeypatch.setattr(llm_client, "_client", fake)
    return fake


class PageServer:
    """httpx MockTransport handler serving canned responses, counting requests."""

    def __init__(self, status_code: int = 200, text: str = "", error: Exception | None = None):
        self.status_code = status_code
        self.text = text
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(
            self.status_code,
            text=self.text,
            headers={"Content-Type": "text/html; charset=utf-8"},
        )

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


def json_ld_page(*blocks, body: str = "<h1>Recipe</h1>") -> str:
    """HTML page with each block embedded as an application/ld+json script (strings are used verbatim)."""
    scripts = "\n".join(
        f'<script type="application/ld+json">{b if isinstance(b, str) else json.dumps(b)}</script>'
        for b in blocks
    )
    return f"<html><head><title>Test</title>{scripts}</head><body>{body}</body></html>"


@pytest.fixture
def pasta_recipe_ld():
    return {
        "@context": "https://schema.org",
        "@type": "Recipe",
        "name": "Pasta",
        "recipeIngredient": ["pasta", "sauce"],
        "recipeInstructions": "Boil. Mix.",
    }


@pytest.fixture
def full_recipe_ld():
    """A realistic schema.org Recipe with sections, image object, and keywords."""
    return {
        "@context": "https://schema.org",
        "@type": "Recipe",
        "name": "Buttermilk Pancakes",
        "image": [{"@type": "ImageObject", "url": "/images/pancakes.jpg"}],
        "recipeCategory": "Breakfast",
        "recipeCuisine": ["American"],
        "keywords": "pancakes, breakfast, easy",
        "recipeIngredient": ["2 cups flour", "2 eggs", "1 1/2 cups buttermilk"],
        "recipeInstructions": [
            {
                "@type": "HowToSection",
                "name": "Batter",
                "itemListElement": [
                    {"@type": "HowToStep", "text": "Whisk dry ingredients."},
                    {"@type": "HowToStep", "text": "Stir in eggs and buttermilk."},
                ],
            },
            {"@type": "HowToStep", "text": "Cook on a hot griddle."},
        ],
    }


@pytest.fixture
def page_server():
    """Factory for PageServer instances: page_server(text=..., status_code=..., error=...)."""
    return PageServer


@pytest.fixture
def make_page():
    """Factory for HTML pages carrying JSON-LD blocks."""
    return json_ld_page
