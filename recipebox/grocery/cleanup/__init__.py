"""Optional external clean-up pass over a built grocery list.

The list is serialised to text, sent to a text-processing service, and the
structured reply is parsed back into an :data:`OrganizedGroceryList`. The
service does not know which recipes an item came from, so provenance is
re-attached afterwards by matching names against the pre-cleanup list.
"""

from __future__ import annotations

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from ..export import format_ingredient
from ..models import GroceryItem, OrganizedGroceryList, union_titles
from ..sections import SECTION_ORDER, StoreSection

if TYPE_CHECKING:
    from ..config import GroceryConfig

logger = logging.getLogger(__name__)

# Sentence the receiving service looks for to tell a grocery-list request
# apart from a recipe-parsing request.
ORGANIZE_MARKER = "Please organize this grocery list and clean up the quantities:"

ORGANIZE_PROMPT = """\
You are organizing a grocery list. The list is already grouped into sections like "Produce", "Dairy & Eggs", etc.

Rules:
1. Keep all existing sections exactly as they are
2. Keep ingredients in their current sections
3. Only combine identical ingredients
4. Remove ingredients like "water for boiling"
5. For spices, remove amounts but keep the item
6. Keep all preparation notes (e.g., "for garnish")

Here's the list:
{list_text}

Return a JSON object with this structure:
{{
  "Produce": [
    {{ "name": "carrots", "amount": "3", "unit": "", "notes": "for garnish" }}
  ],
  "Dairy & Eggs": [
    {{ "name": "milk", "amount": "2", "unit": "cups", "notes": "" }}
  ]
}}"""


class CleanupError(RuntimeError):
    """The clean-up pass failed; the caller keeps its current list."""


class CleanupBackend(ABC):
    """A service that reorganises a serialised grocery list."""

    @abstractmethod
    async def organize(self, request_text: str) -> Any:
        """Send the request text and return the decoded JSON reply.

        Raises:
            CleanupError: On transport failure, an error status, or a reply
                that is not JSON.
        """
        ...


def create_backend(config: GroceryConfig) -> CleanupBackend:
    """Create a clean-up backend based on configuration."""
    backend_name = config.cleanup.backend

    match backend_name:
        case "http":
            from .http import HttpCleanupBackend

            return HttpCleanupBackend(
                endpoint=config.cleanup.endpoint,
                timeout=config.cleanup.timeout,
            )
        case "claude":
            from .claude import ClaudeCleanupBackend

            return ClaudeCleanupBackend(
                api_key=config.cleanup.claude.api_key,
                model=config.cleanup.claude.model,
            )
        case "gemini":
            from .gemini import GeminiCleanupBackend

            return GeminiCleanupBackend(
                api_key=config.cleanup.gemini.api_key,
                model=config.cleanup.gemini.model,
            )
        case _:
            raise ValueError(
                f"Unknown cleanup backend: {backend_name!r} "
                f"(choose http / claude / gemini)"
            )


def serialize_list(organized: OrganizedGroceryList) -> str:
    """Render the list as sectioned text, one item plus its sources per block."""
    blocks: list[str] = []
    for section, items in organized.items():
        rendered = "\n\n".join(
            f"{format_ingredient(item)}\nFrom: {', '.join(item.from_recipes)}"
            for item in items
        )
        blocks.append(f"=== {section} ===\n{rendered}")
    return "\n\n".join(blocks)


def build_request_text(organized: OrganizedGroceryList) -> str:
    return f"{ORGANIZE_MARKER}\n\n{serialize_list(organized)}"


def extract_json_object(text: str) -> Any:
    """Pull the outermost ``{...}`` out of a model reply and decode it."""
    match = re.search(r"\{[\s\S]*\}", text)
    if not match:
        raise CleanupError("No JSON object found in the cleanup reply")
    try:
        return json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise CleanupError(f"Cleanup reply is not valid JSON: {e}") from e


def _field(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value).strip()


def parse_cleanup_response(data: Any) -> OrganizedGroceryList:
    """Validate the service reply and convert it to list form.

    Anything that does not look like ``{section: [{name, ...}, ...]}`` is
    skipped item by item; only a reply that is not an object at all is an
    error. Unknown section names are filed under ``Other``. The returned
    items carry no provenance yet.
    """
    if not isinstance(data, dict):
        raise CleanupError(
            f"Cleanup reply must be a JSON object, got {type(data).__name__}"
        )

    grouped: dict[StoreSection, list[GroceryItem]] = {}
    for section_name, entries in data.items():
        if not isinstance(entries, list):
            logger.debug("Ignoring non-list section %r in cleanup reply", section_name)
            continue
        section = StoreSection.from_name(str(section_name))
        if section is None:
            logger.info("Unknown section %r in cleanup reply; filing under Other", section_name)
            section = StoreSection.OTHER
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            name = entry.get("name")
            if not isinstance(name, str) or not name.strip():
                continue
            grouped.setdefault(section, []).append(
                GroceryItem(
                    name=name.strip(),
                    amount=_field(entry.get("amount")),
                    unit=_field(entry.get("unit")),
                    notes=_field(entry.get("notes")),
                )
            )

    # Keep the service's item order within a section; only sections are reordered
    return {section: grouped[section] for section in SECTION_ORDER if section in grouped}


def reattach_provenance(
    cleaned: OrganizedGroceryList, original: OrganizedGroceryList
) -> OrganizedGroceryList:
    """Copy recipe titles onto cleaned items from name-matching originals.

    An original item is a source when either lowercased name contains the
    other. Short generic names ("oil") can therefore pick up titles from
    several unrelated originals.
    """
    originals = [item for items in original.values() for item in items]
    result: OrganizedGroceryList = {}
    for section, items in cleaned.items():
        updated: list[GroceryItem] = []
        for item in items:
            new_item = item.copy()
            name = new_item.name.lower()
            sources = [
                orig.from_recipes
                for orig in originals
                if orig.name
                and (orig.name.lower() in name or name in orig.name.lower())
            ]
            new_item.from_recipes = union_titles(new_item.from_recipes, *sources)
            updated.append(new_item)
        result[section] = updated
    return result


async def cleanup_list(
    organized: OrganizedGroceryList, backend: CleanupBackend
) -> OrganizedGroceryList:
    """Run the clean-up pass and return a replacement list.

    ``organized`` is left untouched whatever happens.

    Raises:
        CleanupError: If the service call fails or its reply is unusable.
    """
    request_text = build_request_text(organized)
    data = await backend.organize(request_text)
    cleaned = parse_cleanup_response(data)
    logger.info(
        "Cleanup returned %d items in %d sections",
        sum(len(items) for items in cleaned.values()),
        len(cleaned),
    )
    return reattach_provenance(cleaned, organized)
