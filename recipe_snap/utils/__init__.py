"""Configuration, logging, errors and image helpers."""
