"""Recipe request handler.

Single entry point for recipe generation:
- handle_request(): async core, one request in, one HTTP response dict out
- handler(): synchronous platform entry (Netlify/Lambda event + context)

Decision sequence per request:
1. OPTIONS -> 200 preflight (checked before anything else)
2. non-POST -> 405
3. body JSON -> RecipeRequestBody (missing body counts as {})
4. input check per HANDLER_MODE -> 400 on missing/invalid input
5. prompt build -> one completion call -> JSON relay (200)
Any upstream or unexpected failure becomes the generic 500.
Every response carries the CORS headers.
"""

import asyncio
import json
import uuid
from typing import Any, Optional

from pydantic import ValidationError

from recipe_snap.llm.gemini import GeminiRecipeClient
from recipe_snap.llm.parsing import parse_completion
from recipe_snap.models.models import HttpResponse, IncomingRequest, PromptVariant, RecipeRequestBody
from recipe_snap.prompts.prompts import build_prompt, select_variant
from recipe_snap.utils.config import Config, config
from recipe_snap.utils.errors import ClientInputError, UpstreamError
from recipe_snap.utils.images import load_image_attachment
from recipe_snap.utils.logger import logger


CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}

GENERATION_FAILED = {"error": "Failed to generate recipes"}


def build_response(status_code: int, payload: Optional[Any] = None) -> dict[str, Any]:
    """Build the platform response dict. payload=None means an empty body."""
    headers = dict(CORS_HEADERS)
    body = ""
    if payload is not None:
        headers["Content-Type"] = "application/json"
        body = json.dumps(payload)
    return HttpResponse(statusCode=status_code, headers=headers, body=body).to_event()


def parse_body(request: IncomingRequest) -> dict[str, Any]:
    """Decode the JSON body. A missing or blank body is treated as {}.

    Raises:
        json.JSONDecodeError: Malformed JSON (handled as a 500 by the caller).
        ValueError: JSON that is not an object.
    """
    text = request.decoded_body()
    if not text.strip():
        return {}

    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"Request body must be a JSON object, got {type(data).__name__}")
    return data


def parse_inputs(data: dict[str, Any]) -> RecipeRequestBody:
    try:
        return RecipeRequestBody.model_validate(data)
    except ValidationError as e:
        raise ClientInputError("Invalid request body") from e


def missing_input_message(handler_mode: str) -> str:
    if handler_mode == "image":
        return "No image provided"
    return "No image or ingredients provided"


def _recipe_count(payload: dict[str, Any]) -> int:
    recipes = payload.get("recipes")
    return len(recipes) if isinstance(recipes, list) else 0


async def handle_request(
    event: Optional[dict],
    settings: Optional[Config] = None,
    client: Optional[GeminiRecipeClient] = None,
    request_id: Optional[str] = None,
) -> dict[str, Any]:
    """Handle one recipe request.

    Args:
        event: Platform event with "httpMethod" and optional "body" (JSON string).
        settings: Configuration; defaults to the module-level config.
        client: Completion client; when omitted a fresh one is built from settings.
        request_id: Correlation id attached to log records.

    Returns:
        Dict with statusCode, headers and body (JSON string, or "" for preflight).
        Never raises.
    """
    settings = settings or config
    log_extra = {"request_id": request_id} if request_id else {}

    try:
        request = IncomingRequest.from_event(event)

        if request.http_method == "OPTIONS":
            return build_response(200)

        if request.http_method != "POST":
            logger.info(f"Rejected method: {request.http_method or '<none>'}", extra=log_extra)
            return build_response(405, {"error": "Method not allowed"})

        if settings.HANDLER_MODE == "echo":
            return build_response(200, {"ok": True, "echo": request.decoded_body() or None})

        inputs = parse_inputs(parse_body(request))
        variant = select_variant(
            settings.HANDLER_MODE,
            has_image=inputs.image is not None,
            has_ingredients=inputs.ingredients is not None,
        )
        if variant is None:
            raise ClientInputError(missing_input_message(settings.HANDLER_MODE))

        image = None
        if variant != PromptVariant.INGREDIENT_TEXT:
            image = load_image_attachment(inputs.image, settings.MAX_IMAGE_SIZE_MB)

        prompt = build_prompt(
            variant,
            recipe_count=settings.RECIPE_COUNT,
            image=image,
            ingredients=inputs.ingredients,
        )
        logger.info(f"Generating recipes (variant={variant.value})", extra=log_extra)

        completion_client = client or GeminiRecipeClient.from_config(settings)
        completion = await completion_client.complete(prompt)
        payload = parse_completion(completion, strict=settings.VALIDATE_RECIPES)

        logger.info(f"Generated {_recipe_count(payload)} recipes", extra=log_extra)
        return build_response(200, payload)

    except ClientInputError as e:
        logger.info(f"Rejected request: {e.message}", extra=log_extra)
        return build_response(e.status_code, {"error": e.message})
    except UpstreamError as e:
        logger.error(f"Recipe generation failed: {e}", extra=log_extra)
        return build_response(500, GENERATION_FAILED)
    except Exception as e:
        logger.error(f"Unexpected error while generating recipes: {e}", exc_info=True, extra=log_extra)
        return build_response(500, GENERATION_FAILED)


def handler(event: Optional[dict], context: Any = None) -> dict[str, Any]:
    """Synchronous serverless entry point (Netlify Functions / AWS Lambda)."""
    request_id = getattr(context, "aws_request_id", None) or uuid.uuid4().hex[:12]
    return asyncio.run(handle_request(event, request_id=request_id))
