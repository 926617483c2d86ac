"""Error taxonomy for the recipe handler.

ClientInputError is surfaced to the caller as a 4xx with its message.
UpstreamError and its subclasses are logged and collapsed into the generic
500 response; their messages never reach the caller.
"""


class RecipeServiceError(Exception):
    """Base class for handler errors."""


class ClientInputError(RecipeServiceError):
    """Request rejected before the completion API is called."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class UpstreamError(RecipeServiceError):
    """The completion API call failed or returned an unusable payload."""


class UpstreamTimeoutError(UpstreamError):
    """The completion call did not finish within REQUEST_TIMEOUT_SECONDS."""


class MalformedCompletionError(UpstreamError):
    """Completion text is empty, not JSON, or not a JSON object."""


class RecipeSchemaError(MalformedCompletionError):
    """Completion JSON does not match the RecipeCollection schema (strict mode)."""
