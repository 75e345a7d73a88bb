"""Recipe import module for extracting recipes from web pages and PDFs."""

from .ai_extractor import extract_all_with_ai, extract_with_ai
from .errors import (
    FetchFailedError,
    FetchTimeoutError,
    ImportErrorCode,
    InsufficientPdfTextError,
    InvalidInputError,
    InvalidUrlError,
    NoRecipeFoundError,
    PageNotFoundError,
    PdfParseError,
    ProviderAuthenticationError,
    ProviderError,
    ProviderNotConfiguredError,
    ProviderRateLimitedError,
    RecipeImportError,
)
from .extractor import import_from_pdf, import_from_url, validate_url
from .json_ld import extract_schema_org_recipe
from .models import ImportResult, ImportSource, RecipeData
from .pdf_text import extract_pdf_text

__all__ = [
    "ImportResult",
    "ImportSource",
    "RecipeData",
    "import_from_url",
    "import_from_pdf",
    "validate_url",
    "extract_schema_org_recipe",
    "extract_with_ai",
    "extract_all_with_ai",
    "extract_pdf_text",
    "ImportErrorCode",
    "RecipeImportError",
    "InvalidInputError",
    "InvalidUrlError",
    "PdfParseError",
    "FetchFailedError",
    "FetchTimeoutError",
    "PageNotFoundError",
    "NoRecipeFoundError",
    "InsufficientPdfTextError",
    "ProviderNotConfiguredError",
    "ProviderAuthenticationError",
    "ProviderRateLimitedError",
    "ProviderError",
]
