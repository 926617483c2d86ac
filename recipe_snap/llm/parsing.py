"""Parsing of completion text into the recipe payload.

The completion is requested as a JSON object, so it is parsed as-is: no
markdown stripping, no regex extraction, no repair. Anything that is not a
JSON object is an upstream failure.
"""

import json
from typing import Any

from pydantic import ValidationError

from recipe_snap.models.models import RecipeCollection
from recipe_snap.utils.errors import MalformedCompletionError, RecipeSchemaError
from recipe_snap.utils.logger import logger


def parse_completion(response_text: str, strict: bool = False) -> dict[str, Any]:
    """Parse completion text into the dict relayed to the caller.

    Args:
        response_text: Raw completion text.
        strict: Also validate against RecipeCollection (VALIDATE_RECIPES).

    Returns:
        The parsed JSON object, unchanged (validation never rewrites it).

    Raises:
        MalformedCompletionError: Text is not JSON or not a JSON object.
        RecipeSchemaError: strict is set and the object does not match the schema.
    """
    try:
        payload = json.loads(response_text)
    except (json.JSONDecodeError, TypeError) as e:
        logger.debug(f"Unparseable completion: {str(response_text)[:200]!r}")
        raise MalformedCompletionError(f"Completion is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise MalformedCompletionError(
            f"Completion must be a JSON object, got {type(payload).__name__}"
        )

    if strict:
        try:
            collection = RecipeCollection.model_validate(payload)
        except ValidationError as e:
            raise RecipeSchemaError(
                f"Completion does not match recipe schema ({e.error_count()} errors): {e}"
            ) from e
        logger.debug(f"Completion validated: {len(collection.recipes)} recipes")

    return payload
