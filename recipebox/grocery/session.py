"""Grocery list state owned by the presentation layer."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..types import Recipe
from .builder import build_grocery_list
from .cleanup import CleanupBackend, CleanupError, cleanup_list
from .export import format_clipboard
from .models import GroceryItem, OrganizedGroceryList, item_key

logger = logging.getLogger(__name__)


class GroceryListSession:
    """Selected recipes, the list built from them, and what's been ticked off.

    Every selection change rebuilds the list from scratch. Checked items are
    remembered by :func:`item_key`, so they stay checked across rebuilds as
    long as the item itself is unchanged.

    At most one clean-up pass runs at a time. A pass whose selection changed
    (or which was cancelled) while it was waiting is discarded on arrival.
    """

    def __init__(
        self,
        recipes: Iterable[Recipe] = (),
        backend: CleanupBackend | None = None,
    ) -> None:
        self._recipes: list[Recipe] = list(recipes)
        self._backend = backend
        self._checked: set[str] = set()
        self._generation = 0
        self._organizing = False
        self.last_error: str | None = None
        self._grocery_list: OrganizedGroceryList = build_grocery_list(self._recipes)

    # -- selection -----------------------------------------------------------

    @property
    def recipes(self) -> list[Recipe]:
        return list(self._recipes)

    @property
    def grocery_list(self) -> OrganizedGroceryList:
        return self._grocery_list

    def is_selected(self, recipe_id: str) -> bool:
        return any(r.id == recipe_id for r in self._recipes)

    def select(self, recipe: Recipe) -> None:
        if self.is_selected(recipe.id):
            return
        self._recipes.append(recipe)
        self._rebuild()

    def deselect(self, recipe_id: str) -> None:
        remaining = [r for r in self._recipes if r.id != recipe_id]
        if len(remaining) != len(self._recipes):
            self._recipes = remaining
            self._rebuild()

    def set_selection(self, recipes: Iterable[Recipe]) -> None:
        self._recipes = list(recipes)
        self._rebuild()

    def clear(self) -> None:
        self._recipes = []
        self._rebuild()

    def _rebuild(self) -> None:
        self._generation += 1
        self._grocery_list = build_grocery_list(self._recipes)
        self.last_error = None

    # -- checked items -------------------------------------------------------

    @property
    def checked(self) -> frozenset[str]:
        return frozenset(self._checked)

    def is_checked(self, item: GroceryItem) -> bool:
        return item_key(item) in self._checked

    def toggle(self, item: GroceryItem) -> bool:
        """Flip an item's checked state and return the new state."""
        key = item_key(item)
        if key in self._checked:
            self._checked.discard(key)
            return False
        self._checked.add(key)
        return True

    # -- clean-up ------------------------------------------------------------

    @property
    def organizing(self) -> bool:
        return self._organizing

    def cancel_organize(self) -> None:
        """Drop the result of any clean-up pass currently in flight."""
        self._generation += 1

    async def organize(self) -> bool:
        """Replace the list with the clean-up service's version.

        Returns True when a replacement was applied. On failure the current
        list stays as it is and ``last_error`` says why.
        """
        if self._backend is None:
            raise ValueError("No cleanup backend configured for this session")
        if self._organizing:
            logger.info("Cleanup already in progress; ignoring request")
            return False
        if not self._grocery_list:
            return False

        generation = self._generation
        original = self._grocery_list
        self._organizing = True
        self.last_error = None
        try:
            cleaned = await cleanup_list(original, self._backend)
        except (CleanupError, ValueError, ImportError) as e:
            # ValueError/ImportError: backend missing its API key or SDK
            logger.warning("Organizing the grocery list failed: %s", e)
            if generation == self._generation:
                self.last_error = str(e)
            return False
        finally:
            self._organizing = False

        if generation != self._generation:
            logger.info("Selection changed during cleanup; discarding result")
            return False

        self._grocery_list = cleaned
        # Items were renamed/merged, so most old keys no longer identify anything
        present = {item_key(i) for items in cleaned.values() for i in items}
        self._checked &= present
        return True

    # -- export --------------------------------------------------------------

    def clipboard_text(self) -> str:
        return format_clipboard(self._recipes, self._grocery_list, self._checked)
