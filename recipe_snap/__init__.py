"""Photo and ingredient-list to recipe generation handler."""

__version__ = "1.0.0"
