"""CLI entry point for the grocery module."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from dotenv import load_dotenv

from .catalog import filter_recipes, tag_counts
from .config import GroceryConfig, load_config
from .db import RecipeDB, RecipeNotFoundError, SelectionDB
from .export import list_to_dict
from .session import GroceryListSession


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="recipebox-grocery",
        description="Build an aisle-organised shopping list from your recipes",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to the config file (TOML)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Show debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # import
    import_parser = sub.add_parser("import", help="Import recipes from a recipes.json file")
    import_parser.add_argument("file", type=str)

    # recipes
    recipes_parser = sub.add_parser("recipes", help="List stored recipes")
    recipes_parser.add_argument("--search", "-s", type=str, default="")
    recipes_parser.add_argument(
        "--tag", "-t", type=str, action="append", default=[],
        help="Filter by tag (repeatable)",
    )
    recipes_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # select / deselect / clear
    select_parser = sub.add_parser("select", help="Add recipes to the shopping list")
    select_parser.add_argument("ids", nargs="+")
    deselect_parser = sub.add_parser("deselect", help="Remove recipes from the shopping list")
    deselect_parser.add_argument("ids", nargs="+")
    sub.add_parser("clear", help="Empty the shopping list")

    # list
    list_parser = sub.add_parser("list", help="Show the shopping list for the selected recipes")
    list_parser.add_argument(
        "--organize", action="store_true",
        help="Clean the list up with the configured cleanup service",
    )
    list_parser.add_argument("--json", action="store_true", help="Output as JSON")
    list_parser.add_argument(
        "--pdf", type=str, default=None, metavar="FILE",
        help="Also write a printable PDF checklist",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    load_dotenv()
    config = load_config(args.config)

    match args.command:
        case "import":
            _cmd_import(config, args)
        case "recipes":
            _cmd_recipes(config, args)
        case "select":
            _cmd_select(config, args)
        case "deselect":
            _cmd_deselect(config, args)
        case "clear":
            _cmd_clear(config)
        case "list":
            asyncio.run(_cmd_list(config, args))


def _cmd_import(config: GroceryConfig, args) -> None:
    db = RecipeDB(config.database.path)
    try:
        count = db.import_json(args.file)
    except (OSError, ValueError) as e:
        print(f"Import failed: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        db.close()
    print(f"Imported {count} recipes")


def _cmd_recipes(config: GroceryConfig, args) -> None:
    db = RecipeDB(config.database.path)
    selection = SelectionDB(config.database.path)
    try:
        recipes = db.list_recipes()
        selected = set(selection.get_selected_ids())
    finally:
        db.close()
        selection.close()

    matches = filter_recipes(recipes, search=args.search, tags=args.tag)

    if args.json:
        print(json.dumps([r.to_dict() for r in matches], ensure_ascii=False, indent=2))
        return

    if not matches:
        print("No recipes found.")
        return
    for recipe in matches:
        mark = "*" if recipe.id in selected else " "
        tags = f"  [{', '.join(recipe.tags)}]" if recipe.tags else ""
        print(f" {mark} {recipe.id}  {recipe.title}{tags}")

    counts = tag_counts(matches)
    if counts:
        summary = ", ".join(f"{tag} ({n})" for tag, n in sorted(counts.items()))
        print(f"\nTags: {summary}")


def _cmd_select(config: GroceryConfig, args) -> None:
    db = RecipeDB(config.database.path)
    selection = SelectionDB(config.database.path)
    try:
        ids = selection.get_selected_ids()
        for recipe_id in args.ids:
            try:
                recipe = db.get_recipe(recipe_id)
            except RecipeNotFoundError:
                print(f"No recipe with id {recipe_id}", file=sys.stderr)
                continue
            if recipe_id not in ids:
                ids.append(recipe_id)
                print(f"Added: {recipe.title}")
        selection.set_selected_ids(ids)
    finally:
        db.close()
        selection.close()


def _cmd_deselect(config: GroceryConfig, args) -> None:
    selection = SelectionDB(config.database.path)
    try:
        ids = selection.get_selected_ids()
        selection.set_selected_ids([i for i in ids if i not in set(args.ids)])
    finally:
        selection.close()


def _cmd_clear(config: GroceryConfig) -> None:
    selection = SelectionDB(config.database.path)
    try:
        selection.clear()
    finally:
        selection.close()
    print("Shopping list cleared.")


async def _cmd_list(config: GroceryConfig, args) -> None:
    db = RecipeDB(config.database.path)
    selection = SelectionDB(config.database.path)
    try:
        recipes = db.get_recipes(selection.get_selected_ids())
    finally:
        db.close()
        selection.close()

    if not recipes:
        print("No recipes selected for grocery list")
        return

    session = GroceryListSession(recipes)

    if args.organize:
        from .cleanup import create_backend

        print("Organizing...", file=sys.stderr)
        try:
            session = GroceryListSession(recipes, backend=create_backend(config))
            applied = await session.organize()
        except (ValueError, ImportError) as e:
            print(f"Cleanup unavailable: {e}", file=sys.stderr)
            applied = False
        if not applied and session.last_error:
            print(
                f"Could not organize the list ({session.last_error}); "
                "showing it as built.",
                file=sys.stderr,
            )

    if args.json:
        data = {
            "recipes": [r.title for r in session.recipes],
            "sections": list_to_dict(session.grocery_list, session.checked),
        }
        print(json.dumps(data, ensure_ascii=False, indent=2))
    else:
        print(session.clipboard_text())

    if args.pdf:
        from .pdf import generate_pdf

        try:
            path = generate_pdf(
                session.grocery_list,
                args.pdf,
                recipes=session.recipes,
                checked=session.checked,
            )
            print(f"PDF saved: {path}", file=sys.stderr)
        except ImportError as e:
            print(f"PDF generation failed: {e}", file=sys.stderr)


if __name__ == "__main__":
    main()
