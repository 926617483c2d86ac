"""Configuration management for the recipe handler.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults
"""

import os

from dotenv import load_dotenv


# Load .env file (if exists, silently continues if missing)
load_dotenv()

HANDLER_MODES = ("dual", "image", "echo")


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        # Completion API credential (required, never logged unmasked)
        self.GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
        # Multimodal model used for both photo and ingredient-text prompts
        self.GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
        # Handler Mode: which request revision is active
        # "dual": image or ingredient text (image wins when both are sent)
        # "image": image required, simple image-only prompt
        # "echo": deployment smoke test, echoes the raw body without calling the API
        self.HANDLER_MODE: str = os.getenv("HANDLER_MODE", "dual").lower()
        # Number of recipes requested per prompt (spread across Easy/Medium/Hard)
        self.RECIPE_COUNT: int = int(os.getenv("RECIPE_COUNT", "3"))
        # Max Output Tokens: 2000 fits three full recipes with instructions
        self.MAX_OUTPUT_TOKENS: int = int(os.getenv("MAX_OUTPUT_TOKENS", "2000"))
        # Temperature: Controls randomness (0.0 = deterministic, 1.0 = max randomness)
        self.TEMPERATURE: float = float(os.getenv("TEMPERATURE", "0.7"))
        # Upper bound (seconds) on the single completion call
        self.REQUEST_TIMEOUT_SECONDS: float = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "30"))
        # Maximum decoded image size (in MB). Default: 5 MB
        self.MAX_IMAGE_SIZE_MB: int = int(os.getenv("MAX_IMAGE_SIZE_MB", "5"))
        # Validate completions against the Recipe schema before relaying them
        # Default: false (completion JSON is relayed verbatim)
        self.VALIDATE_RECIPES: bool = _env_bool("VALIDATE_RECIPES", "false")
        # Local dev server port
        self.PORT: int = int(os.getenv("PORT", "7777"))

    def validate(self) -> None:
        """Validate required configuration.

        Raises:
            ValueError: If the API key is missing or invalid values provided.
        """
        if not self.GEMINI_API_KEY:
            raise ValueError("GEMINI_API_KEY environment variable is required")
        if self.HANDLER_MODE not in HANDLER_MODES:
            raise ValueError(
                f"HANDLER_MODE must be one of {', '.join(HANDLER_MODES)}, got: {self.HANDLER_MODE}"
            )
        if not (1 <= self.RECIPE_COUNT <= 10):
            raise ValueError(
                f"RECIPE_COUNT must be between 1 and 10, got: {self.RECIPE_COUNT}"
            )
        if self.MAX_OUTPUT_TOKENS < 512:
            raise ValueError(
                f"MAX_OUTPUT_TOKENS must be at least 512, got: {self.MAX_OUTPUT_TOKENS}"
            )
        if not (0.0 <= self.TEMPERATURE <= 1.0):
            raise ValueError(
                f"TEMPERATURE must be between 0.0 and 1.0, got: {self.TEMPERATURE}"
            )
        if self.REQUEST_TIMEOUT_SECONDS <= 0:
            raise ValueError(
                f"REQUEST_TIMEOUT_SECONDS must be positive, got: {self.REQUEST_TIMEOUT_SECONDS}"
            )
        if self.MAX_IMAGE_SIZE_MB < 1:
            raise ValueError(
                f"MAX_IMAGE_SIZE_MB must be at least 1, got: {self.MAX_IMAGE_SIZE_MB}"
            )


# Module-level config instance, validated when a completion client is built
config = Config()
