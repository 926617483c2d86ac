"""Serverless request handlers."""

from .recipe import handle_request, handler

__all__ = ["handle_request", "handler"]
