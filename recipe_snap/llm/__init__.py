"""Completion API client and completion parsing."""
