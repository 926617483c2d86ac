"""Prompt templates for recipe generation."""
