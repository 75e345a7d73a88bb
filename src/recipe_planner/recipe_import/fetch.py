"""Fetching recipe pages over HTTP."""

import logging

import httpx

from recipe_planner.config import settings

from .errors import FetchFailedError, FetchTimeoutError, InvalidUrlError, PageNotFoundError

logger = logging.getLogger(__name__)


def _request_headers() -> dict[str, str]:
    return {
        "User-Agent": settings.fetch_user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    }


def new_http_client() -> httpx.AsyncClient:
    """Client with a bounded timeout and httpx's default redirect limit."""
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=settings.fetch_timeout_seconds,
        headers=_request_headers(),
    )


async def fetch_html(url: str, client: httpx.AsyncClient | None = None) -> str:
    """
    Fetch a page and return its body as text.

    Args:
        url: Already-validated http(s) URL
        client: Optional client to reuse; a short-lived one is created otherwise

    Raises:
        InvalidUrlError: httpx rejects the URL (e.g. a malformed host)
        FetchTimeoutError: the request timed out
        PageNotFoundError: HTTP 404
        FetchFailedError: any other non-2xx status or network failure
    """
    if client is None:
        async with new_http_client() as own_client:
            return await fetch_html(url, own_client)

    try:
        response = await client.get(
            url,
            headers=_request_headers(),
            timeout=settings.fetch_timeout_seconds,
        )
    except httpx.InvalidURL as e:
        raise InvalidUrlError(f"Invalid URL format: {e}") from e
    except httpx.TimeoutException as e:
        raise FetchTimeoutError("Request timeout - URL took too long to respond") from e
    except httpx.HTTPError as e:
        raise FetchFailedError(f"Failed to fetch URL: {e}") from e

    if response.status_code == 404:
        raise PageNotFoundError()
    if not response.is_success:
        raise FetchFailedError(
            f"HTTP error: {response.status_code}", status_code=response.status_code
        )

    logger.debug(f"Fetched {len(response.content)} bytes from {response.url}")
    return response.text
