"""Pydantic models for requests, prompts, recipes and responses."""
