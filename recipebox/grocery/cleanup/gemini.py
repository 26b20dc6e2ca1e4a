"""Gemini API clean-up backend."""

from __future__ import annotations

from typing import Any

from . import ORGANIZE_MARKER, ORGANIZE_PROMPT, CleanupBackend, CleanupError, extract_json_object


class GeminiCleanupBackend(CleanupBackend):
    """Organise the grocery list using Google Gemini."""

    def __init__(self, api_key: str = "", model: str = "gemini-2.0-flash") -> None:
        self._api_key = api_key
        self._model = model

    async def organize(self, request_text: str) -> Any:
        if not self._api_key:
            raise ValueError(
                "Gemini API key is not set. "
                "Check the config file or the GEMINI_API_KEY environment variable."
            )

        try:
            import google.generativeai as genai
        except ImportError:
            raise ImportError(
                "google-generativeai SDK is required: pip install google-generativeai"
            ) from None

        genai.configure(api_key=self._api_key)
        model = genai.GenerativeModel(self._model)

        list_text = request_text.removeprefix(ORGANIZE_MARKER).strip()
        prompt = ORGANIZE_PROMPT.format(list_text=list_text)

        try:
            response = await model.generate_content_async(prompt)
            text = response.text
        except Exception as e:
            # The SDK raises a mix of google.api_core and ValueError types
            raise CleanupError(f"Gemini request failed: {e}") from e

        return extract_json_object(text)
