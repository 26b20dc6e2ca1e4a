"""Clean-up backend that posts to the recipe app's parsing endpoint."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from . import CleanupBackend, CleanupError

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "http://localhost:3000/api/parse-recipe"


class HttpCleanupBackend(CleanupBackend):
    """POST ``{"recipeText": ...}`` to an endpoint that answers with JSON.

    The endpoint is the same one that parses pasted recipes; it recognises
    grocery-list requests by the marker sentence at the start of the text.
    """

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if not endpoint:
            raise ValueError(
                "Cleanup endpoint is not configured. "
                "Set [cleanup] endpoint or RECIPEBOX_CLEANUP_ENDPOINT."
            )
        self._endpoint = endpoint
        self._timeout = timeout
        self._client = client

    async def organize(self, request_text: str) -> Any:
        client = self._client or httpx.AsyncClient(timeout=self._timeout)
        try:
            response = await client.post(
                self._endpoint,
                json={"recipeText": request_text},
            )
        except httpx.HTTPError as e:
            raise CleanupError(f"Cleanup request failed: {e}") from e
        finally:
            if self._client is None:
                await client.aclose()

        if response.is_error:
            logger.warning(
                "Cleanup endpoint returned %d: %s",
                response.status_code,
                response.text[:200],
            )
            raise CleanupError(
                f"Cleanup endpoint returned HTTP {response.status_code}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise CleanupError(f"Cleanup endpoint returned invalid JSON: {e}") from e
