"""
Recipe Planner Web API - FastAPI application.

Exposes the recipe import pipeline and grocery helpers over HTTP.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from recipe_planner import __version__
from recipe_planner.config import settings
from recipe_planner.llm.prompt_logger import is_prompt_logging_enabled
from recipe_planner.recipe_import import (
    FetchTimeoutError,
    ImportErrorCode,
    RecipeImportError,
)
from recipe_planner.web.grocery_routes import router as grocery_router
from recipe_planner.web.recipe_import_routes import router as recipe_import_router

logger = logging.getLogger(__name__)

ERROR_STATUS: dict[ImportErrorCode, int] = {
    ImportErrorCode.INVALID_INPUT: 400,
    ImportErrorCode.FETCH_FAILED: 502,
    ImportErrorCode.NO_RECIPE_FOUND: 422,
    ImportErrorCode.PROVIDER_NOT_CONFIGURED: 503,
    ImportErrorCode.PROVIDER_RATE_LIMITED: 429,
    ImportErrorCode.PROVIDER_ERROR: 502,
}

app = FastAPI(title="Recipe Planner", version=__version__)


@app.on_event("startup")
async def startup_event():
    """Log configuration on startup."""
    logger.info("Recipe Planner starting up...")
    logger.info(f"  AI extraction configured: {settings.ai_configured} (model {settings.openai_model})")
    logger.info(f"  Prompt file logging: {is_prompt_logging_enabled()}")


# CORS middleware for the React frontend dev server and browser extension
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",  # Vite dev server
        "http://127.0.0.1:5173",
    ],
    allow_origin_regex=r"^chrome-extension://.*$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_status(exc: RecipeImportError) -> int:
    if isinstance(exc, FetchTimeoutError):
        return 504
    return ERROR_STATUS[exc.code]


@app.exception_handler(RecipeImportError)
async def recipe_import_error_handler(request: Request, exc: RecipeImportError) -> JSONResponse:
    """Render import failures with a stable user message; details stay in the logs."""
    status = error_status(exc)
    if exc.code in (ImportErrorCode.PROVIDER_ERROR, ImportErrorCode.PROVIDER_NOT_CONFIGURED):
        logger.error(f"{request.url.path} failed [{exc.code.value}]: {exc}")
    else:
        logger.warning(f"{request.url.path} failed [{exc.code.value}]: {exc}")

    return JSONResponse(
        status_code=status,
        content={"error": exc.code.value, "message": exc.user_message},
    )


app.include_router(recipe_import_router, prefix="/api")
app.include_router(grocery_router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}
