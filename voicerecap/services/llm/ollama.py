"""
Ollama LLM provider implementation.

Chats with a local Ollama server through ``ollama.AsyncClient``. The token
cap is passed as ``num_predict`` so small local models cannot ramble past
one line's worth of output.
"""

import logging

import httpx
from ollama import AsyncClient, ResponseError

from voicerecap.core.config import get_settings
from voicerecap.services.llm.base import SUMMARY_SYSTEM_PROMPT, BaseLLM, transient_retry

logger = logging.getLogger(__name__)

# Server busy or model still loading
_TRANSIENT_STATUS = {429, 500, 502, 503}


class OllamaLLM(BaseLLM):
    """Local-model provider; useful when recordings must not leave the machine."""

    def __init__(
        self,
        base_url: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float = 0.2,
        timeout: float = 60.0,
    ) -> None:
        settings = get_settings()
        self._base_url = base_url or settings.ollama_base_url
        self._model = model or settings.ollama_model
        self._max_tokens = max_tokens or settings.summary_max_tokens
        self._temperature = temperature
        self._client = AsyncClient(host=self._base_url, timeout=timeout)

    @transient_retry
    async def generate(self, prompt: str, **kwargs) -> str:
        messages = [
            {"role": "system", "content": kwargs.get("system", SUMMARY_SYSTEM_PROMPT)},
            {"role": "user", "content": prompt},
        ]
        options = {
            "temperature": kwargs.get("temperature", self._temperature),
            "num_predict": kwargs.get("max_tokens", self._max_tokens),
        }
        try:
            response = await self._client.chat(model=self._model, messages=messages, options=options)
        except httpx.TimeoutException as exc:
            raise TimeoutError(f"Ollama at {self._base_url} timed out") from exc
        except (ConnectionError, httpx.TransportError) as exc:
            logger.warning("Ollama unreachable at %s: %s", self._base_url, exc)
            raise ConnectionError(f"Ollama unreachable at {self._base_url}") from exc
        except ResponseError as exc:
            if exc.status_code in _TRANSIENT_STATUS:
                raise ConnectionError(f"Ollama busy ({exc.status_code}): {exc.error}") from exc
            raise RuntimeError(f"Ollama rejected request ({exc.status_code}): {exc.error}") from exc

        text = response.message.content or ""
        if not text.strip():
            raise RuntimeError(f"Ollama model {self._model} returned no text")
        return text
