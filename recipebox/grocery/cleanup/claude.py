"""Claude API clean-up backend."""

from __future__ import annotations

from typing import Any

from . import ORGANIZE_MARKER, ORGANIZE_PROMPT, CleanupBackend, CleanupError, extract_json_object


class ClaudeCleanupBackend(CleanupBackend):
    """Organise the grocery list by asking Claude directly."""

    def __init__(self, api_key: str = "", model: str = "claude-sonnet-4-5-20250929") -> None:
        self._api_key = api_key
        self._model = model

    async def organize(self, request_text: str) -> Any:
        if not self._api_key:
            raise ValueError(
                "Anthropic API key is not set. "
                "Check the config file or the ANTHROPIC_API_KEY environment variable."
            )

        try:
            import anthropic
        except ImportError:
            raise ImportError(
                "anthropic SDK is required: pip install anthropic"
            ) from None

        list_text = request_text.removeprefix(ORGANIZE_MARKER).strip()
        prompt = ORGANIZE_PROMPT.format(list_text=list_text)

        client = anthropic.AsyncAnthropic(api_key=self._api_key)
        try:
            response = await client.messages.create(
                model=self._model,
                max_tokens=4096,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as e:
            raise CleanupError(f"Claude request failed: {e}") from e

        text = response.content[0].text if response.content else ""
        return extract_json_object(text)
