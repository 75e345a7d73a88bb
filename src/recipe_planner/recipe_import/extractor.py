"""Main recipe import orchestration."""

import logging
from dataclasses import replace
from urllib.parse import urlparse

import httpx

from recipe_planner.config import settings

from .ai_extractor import extract_all_with_ai, extract_with_ai
from .errors import InsufficientPdfTextError, InvalidUrlError, NoRecipeFoundError
from .fetch import fetch_html
from .json_ld import extract_schema_org_recipe
from .models import ImportResult, ImportSource, RecipeData
from .pdf_text import extract_pdf_text

logger = logging.getLogger(__name__)


async def import_from_url(
    url: str,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> ImportResult:
    """
    Import a recipe from a web page.

    Pipeline:
    1. Validate URL format (no network I/O on failure)
    2. Fetch the page
    3. Try schema.org JSON-LD markup; if found, the AI is never called
    4. Fall back to AI extraction on the same HTML

    Args:
        url: The URL of the recipe page
        http_client: Optional client for the page fetch

    Returns:
        ImportResult with the recipe and its provenance

    Raises:
        RecipeImportError subclasses; a partial recipe is never returned
    """
    url = validate_url(url)

    logger.info(f"Fetching recipe page {url}")
    html = await fetch_html(url, http_client)

    recipe = extract_schema_org_recipe(html, url)
    if recipe is not None:
        logger.info(f"schema.org extraction succeeded for {url}")
        return ImportResult(
            recipe=replace(recipe, raw_html=html, source_url=url),
            source=ImportSource.SCHEMA_ORG,
        )

    logger.info(f"No schema.org recipe on {url}, falling back to AI extraction")
    recipe = await extract_with_ai(html, url)
    logger.info(f"AI extraction succeeded for {url}")
    return ImportResult(
        recipe=replace(recipe, raw_html=html, source_url=url),
        source=ImportSource.AI_EXTRACTION,
    )


async def import_from_pdf(pdf_bytes: bytes) -> list[RecipeData]:
    """
    Import every recipe in a PDF cookbook.

    Callers enforce upload size limits before calling this.

    Raises:
        PdfParseError: the file can't be decoded
        InsufficientPdfTextError: too little text (likely a scanned PDF)
        NoRecipeFoundError: no complete recipe survived validation
        Provider*Error: AI provider failures
    """
    pdf_text = extract_pdf_text(pdf_bytes)

    if len(pdf_text.strip()) < settings.min_pdf_text_chars:
        raise InsufficientPdfTextError(
            "PDF appears to be empty or contains very little text. "
            "If this is a scanned PDF (images only), text extraction is not supported."
        )

    recipes = await extract_all_with_ai(pdf_text)
    if not recipes:
        raise NoRecipeFoundError("No complete recipes found in the PDF")

    logger.info(f"Imported {len(recipes)} recipes from PDF")
    return recipes


def validate_url(url: str | None) -> str:
    """
    Validate URL format.

    Returns:
        The stripped URL

    Raises:
        InvalidUrlError: not an absolute http(s) URL
    """
    if not url or not url.strip():
        raise InvalidUrlError("URL is required")

    url = url.strip()

    try:
        parsed = urlparse(url)
        # Raises ValueError for a non-numeric or out-of-range port
        parsed.port
    except ValueError as e:
        raise InvalidUrlError("Invalid URL format") from e

    if not parsed.scheme or not parsed.netloc:
        raise InvalidUrlError("Invalid URL format")
    if parsed.scheme.lower() not in ("http", "https"):
        raise InvalidUrlError("Invalid URL protocol. Only http and https are supported")

    return url
