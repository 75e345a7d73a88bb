"""Tests for the AI extraction fallback (OpenAI client mocked)."""

import asyncio
import json

import httpx
import openai
import pytest

from recipe_planner import config
from recipe_planner.config import Settings
from recipe_planner.recipe_import.ai_extractor import (
    extract_all_with_ai,
    extract_with_ai,
    parse_recipe_response,
    parse_recipes_response,
    strip_code_fence,
)
from recipe_planner.recipe_import.errors import (
    NoRecipeFoundError,
    ProviderAuthenticationError,
    ProviderError,
    ProviderNotConfiguredError,
    ProviderRateLimitedError,
)
from recipe_planner.recipe_import.prompts import HTML_TRUNCATION_MARKER, PDF_TRUNCATION_MARKER

PAGE_URL = "https://example.com/recipes/soup"
OPENAI_URL = "https://api.openai.com/v1/chat/completions"

SOUP = {
    "title": "Tomato Soup",
    "ingredients": ["4 tomatoes", "1 onion", "2 cups stock"],
    "instructions": "Simmer everything, then blend.",
    "imageUrl": "/img/soup.jpg",
    "tags": ["Soup", "Vegetarian", "Soup"],
}


def _provider_error(cls, status_code: int):
    response = httpx.Response(status_code, request=httpx.Request("POST", OPENAI_URL))
    return cls("provider said no", response=response, body=None)


class TestStripCodeFence:
    def test_plain_json_untouched(self):
        assert strip_code_fence('{"a": 1}') == '{"a": 1}'

    def test_json_fence(self):
        assert strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_bare_fence_with_surrounding_text(self):
        text = 'Here you go:\n```\n{"recipes": []}\n```\nEnjoy!'
        assert strip_code_fence(text) == '{"recipes": []}'


class TestParseRecipeResponse:
    """Tests for validating single-recipe model output."""

    def test_valid_recipe(self):
        recipe = parse_recipe_response(json.dumps(SOUP), PAGE_URL)
        assert recipe.title == "Tomato Soup"
        assert recipe.ingredients == "4 tomatoes\n1 onion\n2 cups stock"
        assert recipe.instructions == "Simmer everything, then blend."
        assert recipe.image_url == "https://example.com/img/soup.jpg"
        assert recipe.tags == ("Soup", "Vegetarian")

    def test_fenced_json(self):
        text = '```json\n{"title": "Toast", "ingredients": ["bread"], "instructions": "Toast it."}\n```'
        assert parse_recipe_response(text).title == "Toast"

    def test_ingredients_as_string(self):
        text = '{"title": "Toast", "ingredients": "bread\\nbutter", "instructions": "Toast it."}'
        assert parse_recipe_response(text).ingredients == "bread\nbutter"

    def test_null_image(self):
        text = '{"title": "Toast", "ingredients": ["bread"], "instructions": "Toast it.", "imageUrl": "null"}'
        assert parse_recipe_response(text, PAGE_URL).image_url is None

    def test_relative_image_without_base_is_dropped(self):
        text = '{"title": "Toast", "ingredients": ["bread"], "instructions": "Toast it.", "imageUrl": "/t.jpg"}'
        assert parse_recipe_response(text).image_url is None

    def test_empty_ingredients_is_not_found(self):
        text = '{"title": "Toast", "ingredients": [], "instructions": "Toast it."}'
        with pytest.raises(NoRecipeFoundError):
            parse_recipe_response(text)

    def test_missing_title_is_not_found(self):
        text = '{"ingredients": ["bread"], "instructions": "Toast it."}'
        with pytest.raises(NoRecipeFoundError):
            parse_recipe_response(text)

    def test_not_json(self):
        with pytest.raises(NoRecipeFoundError):
            parse_recipe_response("Sorry, I couldn't find a recipe on this page.")

    def test_array_instead_of_object(self):
        with pytest.raises(NoRecipeFoundError):
            parse_recipe_response("[1, 2, 3]")

    def test_wrong_field_types(self):
        with pytest.raises(NoRecipeFoundError):
            parse_recipe_response('{"title": {"nested": true}, "ingredients": ["x"], "instructions": "y"}')


class TestParseRecipesResponse:
    """Tests for validating multi-recipe model output."""

    def test_drops_incomplete_entries(self):
        text = json.dumps({"recipes": [
            {"title": "A", "ingredients": ["x"], "instructions": "Do A."},
            {"title": "B", "ingredients": ["y"]},
            {"title": "C", "ingredients": ["z"], "instructions": "Do C.", "imageUrl": "https://x.com/c.jpg"},
        ]})
        recipes = parse_recipes_response(text)
        assert [r.title for r in recipes] == ["A", "C"]
        assert all(r.image_url is None for r in recipes)

    def test_drops_non_objects_and_invalid_entries(self):
        text = '{"recipes": ["junk", {"title": ["bad"], "ingredients": ["x"], "instructions": "y"}]}'
        assert parse_recipes_response(text) == []

    def test_empty_list_is_not_an_error(self):
        assert parse_recipes_response('{"recipes": []}') == []

    def test_bare_array_accepted(self):
        text = '[{"title": "A", "ingredients": ["x"], "instructions": "Do A."}]'
        assert len(parse_recipes_response(text)) == 1

    def test_missing_recipes_key(self):
        with pytest.raises(NoRecipeFoundError):
            parse_recipes_response('{"title": "A"}')

    def test_not_json(self):
        with pytest.raises(NoRecipeFoundError):
            parse_recipes_response("no recipes here")


class TestExtractWithAI:
    """Tests for extract_with_ai against a mocked provider."""

    def test_returns_recipe(self, fake_llm):
        fake_llm.reply_json(SOUP)
        recipe = asyncio.run(extract_with_ai("<html>soup</html>", PAGE_URL))
        assert recipe.title == "Tomato Soup"
        assert fake_llm.create.await_count == 1

    def test_request_parameters(self, fake_llm, test_settings):
        fake_llm.reply_json(SOUP)
        asyncio.run(extract_with_ai("<html>soup</html>", PAGE_URL))

        kwargs = fake_llm.create.call_args.kwargs
        assert kwargs["model"] == test_settings.openai_model
        assert kwargs["max_tokens"] == 4096
        assert kwargs["temperature"] == 0
        assert "<html>soup</html>" in kwargs["messages"][0]["content"]

    def test_truncates_long_html(self, fake_llm, monkeypatch, test_settings):
        monkeypatch.setattr(test_settings, "max_html_chars", 100)
        fake_llm.reply_json(SOUP)
        asyncio.run(extract_with_ai("x" * 500, PAGE_URL))

        prompt = fake_llm.create.call_args.kwargs["messages"][0]["content"]
        assert HTML_TRUNCATION_MARKER.strip() in prompt
        assert "x" * 100 in prompt
        assert "x" * 101 not in prompt

    def test_short_html_not_truncated(self, fake_llm):
        fake_llm.reply_json(SOUP)
        asyncio.run(extract_with_ai("<p>short</p>", PAGE_URL))
        prompt = fake_llm.create.call_args.kwargs["messages"][0]["content"]
        assert HTML_TRUNCATION_MARKER.strip() not in prompt

    def test_incomplete_reply(self, fake_llm):
        fake_llm.reply_json({"title": "", "ingredients": [], "instructions": ""})
        with pytest.raises(NoRecipeFoundError):
            asyncio.run(extract_with_ai("<html></html>", PAGE_URL))

    def test_empty_reply(self, fake_llm):
        fake_llm.reply("")
        with pytest.raises(NoRecipeFoundError):
            asyncio.run(extract_with_ai("<html></html>", PAGE_URL))

    def test_missing_key_makes_no_call(self, fake_llm, monkeypatch):
        monkeypatch.setattr(config.settings, "_instance", Settings(_env_file=None, openai_api_key=None))
        with pytest.raises(ProviderNotConfiguredError):
            asyncio.run(extract_with_ai("<html></html>", PAGE_URL))
        fake_llm.create.assert_not_called()

    def test_blank_key_is_not_configured(self, fake_llm, monkeypatch):
        monkeypatch.setattr(config.settings, "_instance", Settings(_env_file=None, openai_api_key="  "))
        with pytest.raises(ProviderNotConfiguredError):
            asyncio.run(extract_with_ai("<html></html>", PAGE_URL))

    def test_rate_limited(self, fake_llm):
        fake_llm.create.side_effect = _provider_error(openai.RateLimitError, 429)
        with pytest.raises(ProviderRateLimitedError) as exc_info:
            asyncio.run(extract_with_ai("<html></html>", PAGE_URL))
        assert exc_info.value.code.value == "PROVIDER_RATE_LIMITED"

    def test_bad_credentials(self, fake_llm):
        fake_llm.create.side_effect = _provider_error(openai.AuthenticationError, 401)
        with pytest.raises(ProviderAuthenticationError) as exc_info:
            asyncio.run(extract_with_ai("<html></html>", PAGE_URL))
        assert isinstance(exc_info.value, ProviderNotConfiguredError)

    def test_other_provider_failure(self, fake_llm):
        fake_llm.create.side_effect = _provider_error(openai.InternalServerError, 500)
        with pytest.raises(ProviderError):
            asyncio.run(extract_with_ai("<html></html>", PAGE_URL))

    def test_connection_failure(self, fake_llm):
        fake_llm.create.side_effect = openai.APIConnectionError(request=httpx.Request("POST", OPENAI_URL))
        with pytest.raises(ProviderError):
            asyncio.run(extract_with_ai("<html></html>", PAGE_URL))

    def test_user_message_hides_provider_details(self, fake_llm):
        fake_llm.create.side_effect = _provider_error(openai.InternalServerError, 500)
        with pytest.raises(ProviderError) as exc_info:
            asyncio.run(extract_with_ai("<html></html>", PAGE_URL))
        assert "provider said no" not in exc_info.value.user_message


class TestExtractAllWithAI:
    def test_returns_complete_recipes(self, fake_llm):
        fake_llm.reply_json({"recipes": [
            {"title": "A", "ingredients": ["x"], "instructions": "Do A."},
            {"title": "B", "ingredients": [], "instructions": "Do B."},
            {"title": "C", "ingredients": ["z"], "instructions": "Do C."},
        ]})
        recipes = asyncio.run(extract_all_with_ai("cookbook text " * 10))
        assert [r.title for r in recipes] == ["A", "C"]
        assert fake_llm.create.call_args.kwargs["max_tokens"] == 8192

    def test_truncates_long_text(self, fake_llm, monkeypatch, test_settings):
        monkeypatch.setattr(test_settings, "max_pdf_chars", 50)
        fake_llm.reply_json({"recipes": []})
        asyncio.run(extract_all_with_ai("y" * 200))
        prompt = fake_llm.create.call_args.kwargs["messages"][0]["content"]
        assert PDF_TRUNCATION_MARKER.strip() in prompt
