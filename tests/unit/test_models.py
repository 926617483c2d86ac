"""Unit tests for Pydantic models validation."""

import base64
import json

import pytest
from pydantic import ValidationError

from recipe_snap.models.models import (
    Difficulty,
    HttpResponse,
    ImageAttachment,
    IncomingRequest,
    Prompt,
    PromptVariant,
    Recipe,
    RecipeCollection,
    RecipeRequestBody,
)
from tests.unit.helpers import JPEG_BASE64, JPEG_BYTES, SAMPLE_RECIPES


class TestIncomingRequest:
    """Test event parsing."""

    def test_from_event_reads_method_and_body(self):
        request = IncomingRequest.from_event({"httpMethod": "POST", "body": '{"image": "abc"}'})

        assert request.http_method == "POST"
        assert request.body == '{"image": "abc"}'
        assert request.is_base64_encoded is False

    def test_from_event_tolerates_missing_keys(self):
        request = IncomingRequest.from_event({})

        assert request.http_method == ""
        assert request.body is None
        assert request.decoded_body() == ""

    def test_from_event_none(self):
        assert IncomingRequest.from_event(None).http_method == ""

    def test_from_event_serializes_predecoded_body(self):
        request = IncomingRequest.from_event({"httpMethod": "POST", "body": {"ingredients": "eggs"}})

        assert json.loads(request.body) == {"ingredients": "eggs"}

    def test_decoded_body_undoes_base64_transport(self):
        raw = '{"ingredients": "eggs, flour"}'
        request = IncomingRequest.from_event({
            "httpMethod": "POST",
            "body": base64.b64encode(raw.encode()).decode(),
            "isBase64Encoded": True,
        })

        assert request.decoded_body() == raw


class TestRecipeRequestBody:
    """Test request body validation."""

    def test_both_fields(self):
        body = RecipeRequestBody(image=JPEG_BASE64, ingredients="eggs, flour, milk")

        assert body.image == JPEG_BASE64
        assert body.ingredients == "eggs, flour, milk"

    def test_whitespace_stripped(self):
        assert RecipeRequestBody(ingredients="  eggs  ").ingredients == "eggs"

    def test_blank_fields_become_none(self):
        body = RecipeRequestBody(image="", ingredients="   ")

        assert body.image is None
        assert body.ingredients is None

    def test_unknown_fields_ignored(self):
        body = RecipeRequestBody.model_validate({"ingredients": "eggs", "diet": "vegan"})
        assert body.ingredients == "eggs"

    def test_non_string_image_rejected(self):
        with pytest.raises(ValidationError):
            RecipeRequestBody.model_validate({"image": 12345})

    def test_list_ingredients_rejected(self):
        with pytest.raises(ValidationError):
            RecipeRequestBody.model_validate({"ingredients": ["eggs", "flour"]})


class TestImageAttachment:
    """Test image attachment helpers."""

    def test_data_uri(self):
        attachment = ImageAttachment(data=JPEG_BYTES)
        assert attachment.data_uri == f"data:image/jpeg;base64,{JPEG_BASE64}"

    def test_data_uri_uses_mime_type(self):
        attachment = ImageAttachment(data=b"abc", mime_type="image/png")
        assert attachment.data_uri.startswith("data:image/png;base64,")


class TestPrompt:
    def test_text_only_prompt_is_not_multimodal(self):
        prompt = Prompt(variant=PromptVariant.INGREDIENT_TEXT, system_instruction="s", text="t")
        assert prompt.is_multimodal is False

    def test_image_prompt_is_multimodal(self):
        prompt = Prompt(
            variant=PromptVariant.IMAGE,
            system_instruction="s",
            text="t",
            image=ImageAttachment(data=JPEG_BYTES),
        )
        assert prompt.is_multimodal is True


class TestRecipe:
    """Test Recipe and RecipeCollection schema."""

    def test_valid_recipe_from_camel_case(self):
        recipe = Recipe.model_validate(SAMPLE_RECIPES["recipes"][0])

        assert recipe.title == "Fluffy Pancakes"
        assert recipe.difficulty == Difficulty.EASY
        assert recipe.prep_time == "10 minutes"
        assert recipe.cook_time == "15 minutes"
        assert recipe.servings == 4

    def test_cook_time_optional(self):
        recipe = Recipe.model_validate(SAMPLE_RECIPES["recipes"][1])
        assert recipe.cook_time is None

    def test_invalid_difficulty(self):
        data = dict(SAMPLE_RECIPES["recipes"][0], difficulty="Impossible")
        with pytest.raises(ValidationError):
            Recipe.model_validate(data)

    def test_missing_instructions(self):
        data = dict(SAMPLE_RECIPES["recipes"][0])
        del data["instructions"]
        with pytest.raises(ValidationError):
            Recipe.model_validate(data)

    def test_invalid_servings(self):
        data = dict(SAMPLE_RECIPES["recipes"][0], servings=0)
        with pytest.raises(ValidationError):
            Recipe.model_validate(data)

    def test_collection(self):
        collection = RecipeCollection.model_validate(SAMPLE_RECIPES)
        assert [r.difficulty for r in collection.recipes] == [Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD]

    def test_empty_collection_rejected(self):
        with pytest.raises(ValidationError):
            RecipeCollection.model_validate({"recipes": []})


class TestHttpResponse:
    def test_to_event_uses_platform_keys(self):
        response = HttpResponse(statusCode=200, headers={"A": "b"}, body="{}")

        assert response.to_event() == {"statusCode": 200, "headers": {"A": "b"}, "body": "{}"}

    def test_body_defaults_to_empty(self):
        assert HttpResponse(statusCode=200, headers={}).body == ""
