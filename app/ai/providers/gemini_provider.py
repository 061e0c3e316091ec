from __future__ import annotations

import logging
from typing import Any

import httpx

from app.ai.config import GenerationConfig
from app.ai.exceptions import ProviderError

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return f"HTTP {response.status_code}"


def response_text(body: Any) -> str | None:
    """Return ``candidates[0].content.parts[0].text`` or None when absent."""
    try:
        text = body["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) else None


class GeminiProvider:
    def __init__(
        self,
        api_key: str,
        config: GenerationConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        key = (api_key or "").strip()
        if not key:
            raise RuntimeError("GEMINI_API_KEY is missing")
        self._api_key = key
        self._config = config
        self._transport = transport

    def _payload(self, prompt: str) -> dict[str, Any]:
        return {
            "contents": [
                {
                    "role": "user",
                    "parts": [{"text": prompt}],
                }
            ],
            "generationConfig": {
                "temperature": self._config.temperature,
                "maxOutputTokens": self._config.max_output_tokens,
            },
        }

    async def generate(self, model: str, prompt: str) -> str | None:
        url = f"{self._config.base_url}/models/{model}:generateContent"
        try:
            async with httpx.AsyncClient(timeout=self._config.timeout_s, transport=self._transport) as client:
                response = await client.post(
                    url,
                    params={"key": self._api_key},
                    json=self._payload(prompt),
                    headers={"Content-Type": "application/json"},
                )
        except httpx.HTTPError as exc:
            raise ProviderError(f"{type(exc).__name__}: {exc}", model=model) from exc

        if not response.is_success:
            raise ProviderError(_error_message(response), model=model, status_code=response.status_code)

        try:
            body = response.json()
        except ValueError:
            logger.warning("gemini_response_not_json model=%s", model)
            return None
        return response_text(body)
