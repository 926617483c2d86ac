#!/usr/bin/env python3
"""Ad hoc query runner for the recipe handler.

Run a request through handle_request() without starting a server.

Usage:
    python query.py "eggs, flour, milk"                 # ingredient-text prompt
    python query.py --image images/fridge.jpg           # photo prompt
    python query.py --image images/fridge.jpg --debug   # also print the raw response
    python query.py --mode image --image photo.jpg      # image-only revision

Features:
- Builds the same platform event the deployed function receives
- Renders the returned recipes as markdown
- Debug mode to display the full HTTP response
"""

import asyncio
import base64
import json
import sys
from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from rich.markdown import Markdown

from recipe_snap.handlers.recipe import handle_request
from recipe_snap.utils.config import HANDLER_MODES, config
from recipe_snap.utils.logger import logger

console = Console()


def build_event(ingredients: Optional[str] = None, image_path: Optional[str] = None) -> dict[str, Any]:
    """Build a POST event with the ingredient text and/or base64-encoded photo."""
    body: dict[str, str] = {}
    if ingredients:
        body["ingredients"] = ingredients
    if image_path:
        image_bytes = Path(image_path).read_bytes()
        body["image"] = base64.b64encode(image_bytes).decode("utf-8")
        logger.info(f"Loaded image: {Path(image_path).name} ({len(image_bytes) / 1024:.1f} KB)")
    return {"httpMethod": "POST", "body": json.dumps(body)}


def format_recipes_markdown(payload: dict[str, Any]) -> str:
    """Render a {"recipes": [...]} payload as markdown.

    Missing fields are skipped rather than rendered as blanks; the payload
    comes straight from the model and is not guaranteed to be complete.
    """
    recipes = payload.get("recipes") or []
    if not isinstance(recipes, list) or not recipes:
        return "_No recipes returned._"

    sections = []
    for recipe in recipes:
        if not isinstance(recipe, dict):
            continue
        lines = [f"## {recipe.get('title', 'Untitled recipe')}"]

        facts = []
        if recipe.get("difficulty"):
            facts.append(f"**Difficulty:** {recipe['difficulty']}")
        if recipe.get("prepTime"):
            facts.append(f"**Prep:** {recipe['prepTime']}")
        if recipe.get("cookTime"):
            facts.append(f"**Cook:** {recipe['cookTime']}")
        if recipe.get("servings"):
            facts.append(f"**Serves:** {recipe['servings']}")
        if facts:
            lines.append(" | ".join(facts))

        ingredients = recipe.get("ingredients") or []
        if ingredients:
            lines.append("### Ingredients")
            lines.extend(f"- {item}" for item in ingredients)

        instructions = recipe.get("instructions") or []
        if instructions:
            lines.append("### Instructions")
            lines.extend(f"{idx}. {step}" for idx, step in enumerate(instructions, 1))

        sections.append("\n\n".join(lines))

    return "\n\n---\n\n".join(sections)


def run_query(ingredients: Optional[str], image_path: Optional[str] = None, debug: bool = False) -> int:
    """Send one request through the handler and print the result.

    Returns:
        Process exit code (0 on a 200 response).
    """
    if image_path and not Path(image_path).exists():
        console.print(f"[red]✗ Error: Image file not found: {image_path}[/red]")
        return 1

    event = build_event(ingredients=ingredients, image_path=image_path)
    logger.info(f"Running query (mode={config.HANDLER_MODE}, image={bool(image_path)})")
    response = asyncio.run(handle_request(event, request_id="cli"))

    console.print()
    if debug:
        console.print("[bold cyan]Debug Mode: Full Response[/bold cyan]")
        console.print("[dim]" + "=" * 60 + "[/dim]")
        console.print_json(data={**response, "body": json.loads(response["body"] or "null")})
        console.print("[dim]" + "=" * 60 + "[/dim]")
        console.print()

    payload = json.loads(response["body"]) if response["body"] else {}
    if response["statusCode"] != 200:
        console.print(f"[red]✗ {response['statusCode']}: {payload.get('error', 'request failed')}[/red]")
        return 1

    console.print(Markdown(format_recipes_markdown(payload)))
    return 0


if __name__ == "__main__":
    usage = 'Usage: python query.py [--debug] [--mode dual|image|echo] [--image PATH] ["<ingredients>"]'

    debug_mode = False
    image_path = None
    argv_start = 1

    while argv_start < len(sys.argv) and sys.argv[argv_start].startswith("--"):
        flag = sys.argv[argv_start]
        if flag == "--debug":
            debug_mode = True
            argv_start += 1
        elif flag in ("--image", "--mode"):
            argv_start += 1
            if argv_start >= len(sys.argv):
                print(f"Error: {flag} flag requires a value")
                sys.exit(1)
            value = sys.argv[argv_start]
            if flag == "--image":
                image_path = value
            elif value not in HANDLER_MODES:
                print(f"Error: --mode must be one of {', '.join(HANDLER_MODES)}")
                sys.exit(1)
            else:
                config.HANDLER_MODE = value
            argv_start += 1
        else:
            print(f"Unknown flag: {flag}")
            print(usage)
            sys.exit(1)

    ingredient_text = " ".join(sys.argv[argv_start:]) or None
    if not ingredient_text and not image_path:
        print("Error: provide an ingredient list, an --image, or both")
        print(usage)
        sys.exit(1)

    try:
        sys.exit(run_query(ingredient_text, image_path=image_path, debug=debug_mode))
    except KeyboardInterrupt:
        logger.info("Query interrupted by user.")
        sys.exit(0)
