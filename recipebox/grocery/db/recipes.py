"""Recipe storage and the persisted grocery selection."""

from __future__ import annotations

import json
import logging
import sqlite3
import uuid
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path

from ...types import Recipe
from .schema import ensure_schema

logger = logging.getLogger(__name__)

# snake_case update keys → the camelCase keys of Recipe.to_dict()
_UPDATE_KEYS = {
    "source_url": "sourceUrl",
    "prep_time": "prepTime",
    "cook_time": "cookTime",
    "created_at": "createdAt",
    "updated_at": "updatedAt",
}


class RecipeNotFoundError(KeyError):
    """No recipe with the requested id."""


class RecipeConflictError(RuntimeError):
    """The recipe changed since the caller last read it."""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


class RecipeDB:
    """Manages the recipes table.

    Mutating calls return the whole collection, newest first, so callers can
    replace their copy in one step.
    """

    def __init__(self, db_path: str | Path = "~/.config/recipebox/recipes.db") -> None:
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = ensure_schema(self._db_path)
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def list_recipes(self) -> list[Recipe]:
        conn = self._get_conn()
        rows = conn.execute(
            "SELECT data_json FROM recipes ORDER BY rowid DESC"
        ).fetchall()
        return [Recipe.from_dict(json.loads(row["data_json"])) for row in rows]

    def get_recipe(self, recipe_id: str) -> Recipe:
        conn = self._get_conn()
        row = conn.execute(
            "SELECT data_json FROM recipes WHERE id = ?", (recipe_id,)
        ).fetchone()
        if row is None:
            raise RecipeNotFoundError(recipe_id)
        return Recipe.from_dict(json.loads(row["data_json"]))

    def get_recipes(self, recipe_ids: Iterable[str]) -> list[Recipe]:
        """Fetch recipes in the order given, skipping ids that no longer exist."""
        result: list[Recipe] = []
        for recipe_id in recipe_ids:
            try:
                result.append(self.get_recipe(recipe_id))
            except RecipeNotFoundError:
                logger.warning("Recipe %s no longer exists; skipping", recipe_id)
        return result

    def _insert(self, conn: sqlite3.Connection, recipe: Recipe) -> Recipe:
        now = _now()
        if not recipe.id:
            recipe.id = str(uuid.uuid4())
        recipe.created_at = recipe.created_at or now
        recipe.updated_at = recipe.updated_at or now
        conn.execute(
            """INSERT INTO recipes (id, title, data_json, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?)""",
            (
                recipe.id,
                recipe.title,
                json.dumps(recipe.to_dict(), ensure_ascii=False),
                recipe.created_at,
                recipe.updated_at,
            ),
        )
        return recipe

    def add_recipe(self, recipe: Recipe) -> list[Recipe]:
        """Store a new recipe (a fresh id is assigned when it has none).

        Raises:
            RecipeConflictError: If a recipe with the same id already exists.
        """
        conn = self._get_conn()
        try:
            self._insert(conn, recipe)
        except sqlite3.IntegrityError as e:
            conn.rollback()
            raise RecipeConflictError(
                f"Recipe {recipe.id!r} already exists"
            ) from e
        conn.commit()
        logger.info("Added recipe: %s", recipe.title)
        return self.list_recipes()

    def update_recipe(
        self,
        recipe_id: str,
        updates: dict,
        expected_updated_at: str | None = None,
    ) -> list[Recipe]:
        """Apply field updates to a stored recipe.

        Args:
            recipe_id: Recipe to change.
            updates: Fields to overwrite, snake_case or camelCase.
            expected_updated_at: ``updated_at`` the caller last saw; when
                given and the stored value differs, the update is refused.

        Raises:
            RecipeNotFoundError: If the id is unknown.
            RecipeConflictError: If the recipe was changed in the meantime.
        """
        conn = self._get_conn()
        current = self.get_recipe(recipe_id)
        if expected_updated_at is not None and current.updated_at != expected_updated_at:
            raise RecipeConflictError(
                "Conflict - another edit was in progress. Please try again."
            )

        data = current.to_dict()
        for key, value in updates.items():
            if key == "ingredients":
                value = [
                    i.to_dict() if hasattr(i, "to_dict") else i for i in value
                ]
            data[_UPDATE_KEYS.get(key, key)] = value
        data["id"] = recipe_id
        data["updatedAt"] = _now()
        updated = Recipe.from_dict(data)

        cur = conn.execute(
            """UPDATE recipes SET title = ?, data_json = ?, updated_at = ?
               WHERE id = ? AND updated_at = ?""",
            (
                updated.title,
                json.dumps(updated.to_dict(), ensure_ascii=False),
                updated.updated_at,
                recipe_id,
                current.updated_at,
            ),
        )
        if cur.rowcount == 0:
            conn.rollback()
            raise RecipeConflictError(
                "Conflict - another edit was in progress. Please try again."
            )
        conn.commit()
        logger.info("Updated recipe: %s", updated.title)
        return self.list_recipes()

    def delete_recipe(self, recipe_id: str) -> list[Recipe]:
        """Remove a recipe (and drop it from the grocery selection).

        Raises:
            RecipeNotFoundError: If the id is unknown.
        """
        conn = self._get_conn()
        cur = conn.execute("DELETE FROM recipes WHERE id = ?", (recipe_id,))
        if cur.rowcount == 0:
            conn.rollback()
            raise RecipeNotFoundError(recipe_id)
        conn.execute("DELETE FROM grocery_selection WHERE recipe_id = ?", (recipe_id,))
        conn.commit()
        logger.info("Deleted recipe: %s", recipe_id)
        return self.list_recipes()

    def import_json(self, path: str | Path) -> int:
        """Load recipes from a recipes.json export (a list, newest first).

        Recipes whose id is already stored are skipped.

        Returns:
            Number of recipes imported.
        """
        entries = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(entries, list):
            raise ValueError(f"{path}: expected a JSON list of recipes")

        conn = self._get_conn()
        imported = 0
        # Insert oldest first so rowid order matches the file's newest-first order
        for entry in reversed(entries):
            if not isinstance(entry, dict):
                continue
            recipe = Recipe.from_dict(entry)
            try:
                self._insert(conn, recipe)
            except sqlite3.IntegrityError:
                logger.debug("Recipe %s already stored; skipping", recipe.id)
                continue
            imported += 1
        conn.commit()
        return imported


class SelectionDB:
    """Manages the grocery_selection table (recipe ids in selection order)."""

    def __init__(self, db_path: str | Path = "~/.config/recipebox/recipes.db") -> None:
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = ensure_schema(self._db_path)
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def get_selected_ids(self) -> list[str]:
        conn = self._get_conn()
        rows = conn.execute(
            "SELECT recipe_id FROM grocery_selection ORDER BY position"
        ).fetchall()
        return [row["recipe_id"] for row in rows]

    def set_selected_ids(self, recipe_ids: Iterable[str]) -> None:
        conn = self._get_conn()
        conn.execute("DELETE FROM grocery_selection")
        seen: set[str] = set()
        position = 0
        for recipe_id in recipe_ids:
            if recipe_id in seen:
                continue
            seen.add(recipe_id)
            conn.execute(
                "INSERT INTO grocery_selection (position, recipe_id) VALUES (?, ?)",
                (position, recipe_id),
            )
            position += 1
        conn.commit()

    def clear(self) -> None:
        conn = self._get_conn()
        conn.execute("DELETE FROM grocery_selection")
        conn.commit()
