"""API endpoints for recipe import from URLs and PDF files."""

import logging

from fastapi import APIRouter, HTTPException, UploadFile
from pydantic import BaseModel

from recipe_planner.config import settings
from recipe_planner.recipe_import import RecipeData, import_from_pdf, import_from_url

logger = logging.getLogger(__name__)

router = APIRouter(tags=["recipe-import"])

PDF_CONTENT_TYPES = ("application/pdf", "application/x-pdf")


# =============================================================================
# Request/Response Models
# =============================================================================


class ImportRequest(BaseModel):
    """Request to import a recipe from URL."""

    url: str


class RecipeResponse(BaseModel):
    """Extracted recipe for user review."""

    title: str
    ingredients: str  # newline-delimited
    instructions: str
    image_url: str | None = None
    tags: list[str] = []
    source_url: str | None = None

    @classmethod
    def from_recipe(cls, recipe: RecipeData) -> "RecipeResponse":
        return cls(**recipe.to_dict())


class ImportResponse(BaseModel):
    """Response from a URL import."""

    recipe: RecipeResponse
    source: str  # "schema.org" | "ai-extraction"


class PdfImportResponse(BaseModel):
    """Response from a PDF import."""

    recipes: list[RecipeResponse]
    count: int


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/recipes/import", response_model=ImportResponse)
async def import_recipe(req: ImportRequest) -> ImportResponse:
    """
    Extract recipe data from a URL for preview.

    schema.org markup is used when present; otherwise AI extraction.
    Failures are rendered by the RecipeImportError handler in app.py.
    """
    logger.info(f"Import request for URL: {req.url}")

    result = await import_from_url(req.url)

    return ImportResponse(
        recipe=RecipeResponse.from_recipe(result.recipe),
        source=result.source.value,
    )


@router.post("/recipes/import/pdf", response_model=PdfImportResponse)
async def import_recipe_pdf(file: UploadFile) -> PdfImportResponse:
    """Extract every recipe from an uploaded PDF (max settings.max_pdf_upload_bytes)."""
    filename = file.filename or ""
    if file.content_type not in PDF_CONTENT_TYPES and not filename.lower().endswith(".pdf"):
        raise HTTPException(status_code=400, detail="Only PDF files are allowed")

    # Read one byte past the limit so oversized uploads are detected without buffering them whole
    limit = settings.max_pdf_upload_bytes
    pdf_bytes = await file.read(limit + 1)
    if len(pdf_bytes) > limit:
        raise HTTPException(
            status_code=413,
            detail=f"PDF exceeds the {limit // (1024 * 1024)} MB upload limit",
        )

    logger.info(f"PDF import request: {filename} ({len(pdf_bytes)} bytes)")

    recipes = await import_from_pdf(pdf_bytes)

    return PdfImportResponse(
        recipes=[RecipeResponse.from_recipe(recipe) for recipe in recipes],
        count=len(recipes),
    )
