"""Sample payloads shared by the unit tests."""

import base64
import json


# JPEG magic bytes (FF D8 FF) followed by a JFIF header and filler
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00" + b"\x00" * 64
# PNG magic bytes: 89 50 4E 47 0D 0A 1A 0A
PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR" + b"\x00" * 64
JPEG_BASE64 = base64.b64encode(JPEG_BYTES).decode("ascii")

SAMPLE_RECIPES = {
    "recipes": [
        {
            "title": "Fluffy Pancakes",
            "difficulty": "Easy",
            "prepTime": "10 minutes",
            "cookTime": "15 minutes",
            "servings": 4,
            "ingredients": ["2 eggs", "1 cup flour", "1 cup milk"],
            "instructions": ["Whisk everything together", "Cook on a hot griddle"],
        },
        {
            "title": "Crepes",
            "difficulty": "Medium",
            "prepTime": "15 minutes",
            "servings": 2,
            "ingredients": ["eggs", "flour", "milk"],
            "instructions": ["Make a thin batter", "Rest 30 minutes", "Cook thin crepes"],
        },
        {
            "title": "Dutch Baby",
            "difficulty": "Hard",
            "prepTime": "10 minutes",
            "cookTime": "25 minutes",
            "servings": 3,
            "ingredients": ["eggs", "flour", "milk"],
            "instructions": ["Heat skillet in oven", "Blend batter", "Bake until puffed"],
        },
    ]
}


def post_event(body) -> dict:
    """POST event with a JSON-encoded body (dict) or a raw body string."""
    if isinstance(body, dict):
        body = json.dumps(body)
    return {"httpMethod": "POST", "body": body}
