"""
Error taxonomy for recipe import.

Every failure in the pipeline is raised as a RecipeImportError subclass.
The code groups errors by what a caller should do about them;
user_message is a stable string safe to show to end users, while str(exc)
may contain provider or network details meant for logs only.
"""

from enum import Enum


class ImportErrorCode(str, Enum):
    """Error kinds a caller maps to user-facing behavior."""

    INVALID_INPUT = "INVALID_INPUT"
    FETCH_FAILED = "FETCH_FAILED"
    NO_RECIPE_FOUND = "NO_RECIPE_FOUND"
    PROVIDER_NOT_CONFIGURED = "PROVIDER_NOT_CONFIGURED"
    PROVIDER_RATE_LIMITED = "PROVIDER_RATE_LIMITED"
    PROVIDER_ERROR = "PROVIDER_ERROR"


USER_MESSAGES: dict[ImportErrorCode, str] = {
    ImportErrorCode.INVALID_INPUT: "That doesn't look like something we can import. Check the URL or file and try again.",
    ImportErrorCode.FETCH_FAILED: "We couldn't access that URL. Check the link and try again.",
    ImportErrorCode.NO_RECIPE_FOUND: "No recipe found. Try adding it manually.",
    ImportErrorCode.PROVIDER_NOT_CONFIGURED: "Recipe import is temporarily unavailable.",
    ImportErrorCode.PROVIDER_RATE_LIMITED: "Too many imports right now. Please try again in a few minutes.",
    ImportErrorCode.PROVIDER_ERROR: "Something went wrong while importing the recipe. Please try again.",
}


class RecipeImportError(Exception):
    """Base class for all recipe import failures."""

    code: ImportErrorCode = ImportErrorCode.PROVIDER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def user_message(self) -> str:
        return USER_MESSAGES[self.code]


class InvalidInputError(RecipeImportError):
    code = ImportErrorCode.INVALID_INPUT


class InvalidUrlError(InvalidInputError):
    """URL is malformed or not http(s). Raised before any network I/O."""


class PdfParseError(InvalidInputError):
    """PDF could not be decoded to text."""

    @property
    def user_message(self) -> str:
        return (
            "This PDF couldn't be read. It may be corrupted, or an image-only "
            "(scanned) PDF, which isn't supported."
        )


class FetchFailedError(RecipeImportError):
    """The source page could not be fetched."""

    code = ImportErrorCode.FETCH_FAILED

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class FetchTimeoutError(FetchFailedError):
    @property
    def user_message(self) -> str:
        return "The website took too long to respond. Please try again."


class PageNotFoundError(FetchFailedError):
    def __init__(self, message: str = "URL not found (404)"):
        super().__init__(message, status_code=404)

    @property
    def user_message(self) -> str:
        return "That page wasn't found (404). Check the link and try again."


class NoRecipeFoundError(RecipeImportError):
    code = ImportErrorCode.NO_RECIPE_FOUND


class InsufficientPdfTextError(NoRecipeFoundError):
    """PDF decoded, but holds too little text to contain a recipe (likely scanned)."""

    @property
    def user_message(self) -> str:
        return (
            "This PDF contains little or no text. Scanned (image-only) PDFs "
            "aren't supported."
        )


class ProviderNotConfiguredError(RecipeImportError):
    """AI credentials are missing."""

    code = ImportErrorCode.PROVIDER_NOT_CONFIGURED


class ProviderAuthenticationError(ProviderNotConfiguredError):
    """AI provider rejected the configured credentials."""


class ProviderRateLimitedError(RecipeImportError):
    code = ImportErrorCode.PROVIDER_RATE_LIMITED


class ProviderError(RecipeImportError):
    """Any other AI provider failure."""

    code = ImportErrorCode.PROVIDER_ERROR
