"""Data models and schemas for the recipe handler.

Defines Pydantic models for the platform event, the request body, the
prompt sent to the completion API, the recipes it returns, and the HTTP
response handed back to the platform. All models use Pydantic v2.
"""

import base64
import json
from enum import Enum
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Difficulty(str, Enum):
    """Difficulty levels the prompts ask the model to spread recipes across."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class PromptVariant(str, Enum):
    """Which prompt is sent to the completion API.

    - IMAGE: photo prompt of the dual image/text revision (includes cookTime)
    - INGREDIENT_TEXT: text-only prompt built from a free-text ingredient list
    - IMAGE_ONLY_SIMPLE: photo prompt of the image-only revision (no cookTime)
    """

    IMAGE = "image"
    INGREDIENT_TEXT = "ingredient_text"
    IMAGE_ONLY_SIMPLE = "image_only_simple"


class IncomingRequest(BaseModel):
    """Platform event (Netlify/Lambda shape) reduced to the fields the handler reads."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    http_method: Annotated[str, Field("", alias="httpMethod")]
    body: Annotated[Optional[str], Field(None, description="JSON-encoded request body")]
    is_base64_encoded: Annotated[bool, Field(False, alias="isBase64Encoded")]

    @classmethod
    def from_event(cls, event: Optional[dict]) -> "IncomingRequest":
        """Build from a raw event dict, tolerating missing keys and pre-decoded bodies."""
        event = event or {}
        body = event.get("body")
        if body is not None and not isinstance(body, str):
            body = json.dumps(body)
        return cls(
            httpMethod=str(event.get("httpMethod") or ""),
            body=body,
            isBase64Encoded=bool(event.get("isBase64Encoded", False)),
        )

    def decoded_body(self) -> str:
        """Return the body text, undoing the platform's base64 transport encoding."""
        if not self.body:
            return ""
        if self.is_base64_encoded:
            return base64.b64decode(self.body).decode("utf-8")
        return self.body


class RecipeRequestBody(BaseModel):
    """Parsed POST body. Empty or whitespace-only fields count as absent."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    image: Annotated[
        Optional[str],
        Field(None, description="Base64-encoded JPEG/PNG, plain or as a data: URI"),
    ]
    ingredients: Annotated[
        Optional[str],
        Field(None, description="Free-text ingredient list, e.g. 'eggs, flour, milk'"),
    ]

    @field_validator("image", "ingredients", mode="after")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None


class ImageAttachment(BaseModel):
    """Decoded image bytes plus the MIME type they are sent with."""

    data: bytes
    mime_type: str = "image/jpeg"

    @property
    def data_uri(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


class Prompt(BaseModel):
    """Everything sent to the completion API for one request."""

    variant: PromptVariant
    system_instruction: str
    text: str
    image: Optional[ImageAttachment] = None

    @property
    def is_multimodal(self) -> bool:
        return self.image is not None


class Recipe(BaseModel):
    """One generated recipe, in the camelCase shape the prompts request.

    Only enforced when VALIDATE_RECIPES is enabled; otherwise the
    completion JSON is relayed as-is.
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    title: Annotated[str, Field(min_length=1, max_length=200)]
    difficulty: Difficulty
    prep_time: Annotated[str, Field(alias="prepTime", min_length=1)]
    cook_time: Annotated[Optional[str], Field(None, alias="cookTime")]
    servings: Annotated[int, Field(ge=1, le=100)]
    ingredients: Annotated[List[str], Field(min_length=1, max_length=100)]
    instructions: Annotated[List[str], Field(min_length=1, max_length=100)]


class RecipeCollection(BaseModel):
    """Top-level completion payload: {"recipes": [...]}"""

    recipes: Annotated[List[Recipe], Field(min_length=1, max_length=10)]


class HttpResponse(BaseModel):
    """Response handed back to the hosting platform."""

    model_config = ConfigDict(populate_by_name=True)

    status_code: Annotated[int, Field(alias="statusCode")]
    headers: dict[str, str]
    body: str = ""

    def to_event(self) -> dict[str, Any]:
        """Serialize with the platform's camelCase keys."""
        return self.model_dump(by_alias=True)
