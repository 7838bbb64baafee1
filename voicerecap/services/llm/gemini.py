"""
Gemini LLM provider implementation.

Uses the Google Gen AI SDK (``google.genai``) through its async surface,
``client.aio.models.generate_content``. Server errors, quota exhaustion and
network failures are treated as transient.
"""

import logging

import httpx
from google import genai
from google.genai import errors, types

from voicerecap.core.config import get_settings
from voicerecap.services.llm.base import SUMMARY_SYSTEM_PROMPT, BaseLLM, transient_retry

logger = logging.getLogger(__name__)


class GeminiLLM(BaseLLM):
    """Default provider; the hosted model the app was first built against."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float = 0.2,
    ) -> None:
        settings = get_settings()
        self._model = model or settings.gemini_model
        self._max_tokens = max_tokens or settings.summary_max_tokens
        self._temperature = temperature
        self._client = genai.Client(api_key=api_key or settings.gemini_api_key)

    @transient_retry
    async def generate(self, prompt: str, **kwargs) -> str:
        config = types.GenerateContentConfig(
            system_instruction=kwargs.get("system", SUMMARY_SYSTEM_PROMPT),
            temperature=kwargs.get("temperature", self._temperature),
            max_output_tokens=kwargs.get("max_tokens", self._max_tokens),
        )
        try:
            response = await self._client.aio.models.generate_content(
                model=self._model, contents=prompt, config=config
            )
        except httpx.TimeoutException as exc:
            raise TimeoutError("Gemini request timed out") from exc
        except httpx.TransportError as exc:
            raise ConnectionError(f"Gemini unreachable: {exc}") from exc
        except errors.ServerError as exc:
            logger.warning("Gemini server error %s: %s", exc.code, exc.message)
            raise ConnectionError(f"Gemini unavailable ({exc.code})") from exc
        except errors.APIError as exc:
            if exc.code == 429:
                logger.warning("Gemini quota exhausted: %s", exc.message)
                raise ConnectionError("Gemini quota exhausted") from exc
            raise RuntimeError(f"Gemini rejected request ({exc.code}): {exc.message}") from exc

        # ``text`` is None when the candidate was blocked or cut off before any output
        if not response.text:
            raise RuntimeError("Gemini returned no text")
        return response.text
