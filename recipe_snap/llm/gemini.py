"""Single-shot completion client for the Gemini API.

Wraps google-genai's synchronous client for the handler:
- builds the request (system instruction, text part, optional inline image)
- asks for a JSON-object response with a bounded output budget
- runs the blocking call on its own worker thread, bounded by REQUEST_TIMEOUT_SECONDS;
  a timed-out worker is abandoned, never joined, so the invocation returns on time
- maps every failure onto the UpstreamError hierarchy

No retries: one call per request, a failure is terminal for that request.
"""

import asyncio
import functools
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from recipe_snap.models.models import Prompt
from recipe_snap.utils.config import Config
from recipe_snap.utils.errors import MalformedCompletionError, UpstreamError, UpstreamTimeoutError
from recipe_snap.utils.logger import logger, mask_secret


class GeminiRecipeClient:
    """Completion client bound to one model and one set of generation limits."""

    def __init__(
        self,
        api_key: str,
        model: str,
        max_output_tokens: int = 2000,
        temperature: float = 0.7,
        timeout_seconds: float = 30.0,
        client: Optional[genai.Client] = None,
    ) -> None:
        self.model = model
        self.max_output_tokens = max_output_tokens
        self.temperature = temperature
        self.timeout_seconds = timeout_seconds
        # HttpOptions.timeout is in milliseconds
        self._client = client or genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=int(timeout_seconds * 1000)),
        )
        logger.debug(
            f"Gemini client ready (model={model}, api_key={mask_secret(api_key)}, "
            f"max_output_tokens={max_output_tokens}, timeout={timeout_seconds}s)"
        )

    @classmethod
    def from_config(cls, settings: Config) -> "GeminiRecipeClient":
        """Validate settings and build a client from them.

        Raises:
            ValueError: If the configuration is invalid (e.g. missing GEMINI_API_KEY).
        """
        settings.validate()
        return cls(
            api_key=settings.GEMINI_API_KEY,
            model=settings.GEMINI_MODEL,
            max_output_tokens=settings.MAX_OUTPUT_TOKENS,
            temperature=settings.TEMPERATURE,
            timeout_seconds=settings.REQUEST_TIMEOUT_SECONDS,
        )

    def build_contents(self, prompt: Prompt) -> list[types.Content]:
        """User turn: instruction text first, then the photo when there is one."""
        parts = [types.Part.from_text(text=prompt.text)]
        if prompt.image is not None:
            parts.append(types.Part.from_bytes(data=prompt.image.data, mime_type=prompt.image.mime_type))
        return [types.Content(role="user", parts=parts)]

    def build_generation_config(self, prompt: Prompt) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=prompt.system_instruction,
            response_mime_type="application/json",
            max_output_tokens=self.max_output_tokens,
            temperature=self.temperature,
        )

    async def complete(self, prompt: Prompt) -> str:
        """Send the prompt and return the completion text.

        Args:
            prompt: Prompt built by recipe_snap.prompts.build_prompt.

        Returns:
            Raw completion text (expected to be a JSON object).

        Raises:
            UpstreamTimeoutError: The call exceeded timeout_seconds.
            MalformedCompletionError: The API returned no text.
            UpstreamError: Any API, network or client failure.
        """
        logger.info(
            f"Calling Gemini (model={self.model}, variant={prompt.variant.value}, "
            f"multimodal={prompt.is_multimodal})"
        )

        # Not the loop's default executor: asyncio.run() joins that one on exit
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="gemini-call")
        call = functools.partial(
            self._client.models.generate_content,
            model=self.model,
            contents=self.build_contents(prompt),
            config=self.build_generation_config(prompt),
        )
        try:
            response = await asyncio.wait_for(
                asyncio.get_running_loop().run_in_executor(executor, call),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise UpstreamTimeoutError(
                f"Gemini call exceeded {self.timeout_seconds}s timeout"
            ) from e
        except genai_errors.APIError as e:
            raise UpstreamError(f"Gemini API error {e.code}: {e.message}") from e
        except Exception as e:
            raise UpstreamError(f"Gemini request failed: {e}") from e
        finally:
            executor.shutdown(wait=False)

        text = response.text
        if not text:
            raise MalformedCompletionError(
                f"Gemini returned an empty completion (finish_reason={_finish_reason(response)})"
            )

        logger.debug(f"Gemini completion received ({len(text)} chars)")
        return text


def _finish_reason(response) -> Optional[str]:
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None
    reason = getattr(candidates[0], "finish_reason", None)
    return getattr(reason, "value", reason)
