"""Prompt templates for recipe generation.

Provides one factory per PromptVariant plus build_prompt(), which picks the
variant from the request inputs and the configured HANDLER_MODE.
Every variant asks for the same JSON shape ({"recipes": [...]}) so the
handler can relay the completion unchanged.
"""

from typing import Optional

from recipe_snap.models.models import ImageAttachment, Prompt, PromptVariant


CHEF_SYSTEM_INSTRUCTION = (
    "You are a professional chef AI that analyzes food photos and creates realistic recipes. "
    "Look carefully at the actual visible ingredients, dishes, or prepared foods in the image. "
    "Create recipes that ONLY use ingredients that are clearly visible in the photo. "
    "If you see cooked food, create variations or similar dishes. "
    "Be specific about what you actually see."
)

PANTRY_SYSTEM_INSTRUCTION = (
    "You are a professional chef AI that creates realistic recipes from a list of ingredients "
    "a home cook already has. Use ONLY the listed ingredients plus common pantry staples "
    "(salt, pepper, oil). Never add other ingredients."
)


def _difficulty_levels(recipe_count: int) -> str:
    """Describe how recipe_count recipes should spread across difficulty levels."""
    if recipe_count == 1:
        return "Pick the most fitting difficulty level: Easy, Medium, or Hard"
    if recipe_count == 3:
        return "Create 3 different difficulty levels: Easy, Medium, Hard"
    return f"Spread the {recipe_count} recipes across the difficulty levels Easy, Medium, and Hard"


def _output_schema(ingredient_hint: str, include_cook_time: bool = True) -> str:
    """JSON shape the model must return. cookTime is omitted by the image-only revision."""
    cook_time_line = '\n      "cookTime": "XX minutes",' if include_cook_time else ""
    return f"""Return response as JSON object with "recipes" array:
{{
  "recipes": [
    {{
      "title": "Specific recipe name",
      "difficulty": "Easy|Medium|Hard",
      "prepTime": "XX minutes",{cook_time_line}
      "servings": number,
      "ingredients": ["{ingredient_hint}"],
      "instructions": ["detailed cooking steps"]
    }}
  ]
}}"""


def get_image_prompt_text(recipe_count: int, include_cook_time: bool = True) -> str:
    """User instruction that accompanies the photo.

    Args:
        recipe_count: Number of recipes to request.
        include_cook_time: Whether the output schema asks for cookTime.

    Returns:
        str: Instruction text block placed before the image part.
    """
    return f"""Analyze this food photo carefully and create {recipe_count} recipes based on EXACTLY what you see:
1. Look at the actual visible ingredients, prepared foods, or dishes
2. Only use ingredients that are clearly visible in the image
3. If you see a cooked dish, create recipes for similar dishes
4. {_difficulty_levels(recipe_count)}

{_output_schema("only ingredients visible in photo", include_cook_time)}"""


def get_ingredient_prompt_text(ingredients: str, recipe_count: int) -> str:
    """User instruction for the text-only variant.

    The ingredient list is embedded verbatim so the model sees exactly what
    the caller sent.
    """
    return f"""Create {recipe_count} recipes using ONLY these ingredients: {ingredients}
1. Use only the ingredients listed above
2. You may assume common pantry staples (salt, pepper, oil) are available
3. Do not add any other ingredients
4. {_difficulty_levels(recipe_count)}

{_output_schema("only the listed ingredients and pantry staples")}"""


def select_variant(
    handler_mode: str,
    has_image: bool,
    has_ingredients: bool,
) -> Optional[PromptVariant]:
    """Choose the prompt variant. An image takes precedence over ingredient text.

    Returns:
        The variant to use, or None when the inputs the mode needs are missing.
    """
    if handler_mode == "image":
        return PromptVariant.IMAGE_ONLY_SIMPLE if has_image else None
    if has_image:
        return PromptVariant.IMAGE
    if has_ingredients:
        return PromptVariant.INGREDIENT_TEXT
    return None


def build_prompt(
    variant: PromptVariant,
    recipe_count: int = 3,
    image: Optional[ImageAttachment] = None,
    ingredients: Optional[str] = None,
) -> Prompt:
    """Assemble the system instruction, user text and optional image for one request.

    Raises:
        ValueError: If the variant's required input is missing.
    """
    if variant in (PromptVariant.IMAGE, PromptVariant.IMAGE_ONLY_SIMPLE):
        if image is None:
            raise ValueError(f"{variant.value} prompt requires an image")
        return Prompt(
            variant=variant,
            system_instruction=CHEF_SYSTEM_INSTRUCTION,
            text=get_image_prompt_text(
                recipe_count,
                include_cook_time=variant == PromptVariant.IMAGE,
            ),
            image=image,
        )

    if not ingredients:
        raise ValueError(f"{variant.value} prompt requires ingredients")
    return Prompt(
        variant=variant,
        system_instruction=PANTRY_SYSTEM_INSTRUCTION,
        text=get_ingredient_prompt_text(ingredients, recipe_count),
    )
