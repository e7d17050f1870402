"""Google Gemini generative AI provider."""

import logging
from typing import Any

import httpx

from crew_api.exceptions import AIProviderError
from crew_api.providers.base import GenerativeProvider

logger = logging.getLogger(__name__)


class GeminiProvider(GenerativeProvider):
    """Gemini ``generateContent`` endpoint over httpx."""

    BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

    def __init__(self, api_key: str, model: str, timeout: float = 60.0) -> None:
        """Initialize provider.

        Args:
            api_key: Gemini API key
            model: Model name (e.g. ``gemini-3-flash-preview``)
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.model = model
        self.timeout = timeout

    def _get_headers(self) -> dict[str, str]:
        """Get API request headers."""
        return {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }

    async def generate_json(self, prompt: str, response_schema: dict[str, Any]) -> str:
        """Generate a JSON reply constrained by ``response_schema``."""
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": response_schema,
            },
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    f"{self.BASE_URL}/models/{self.model}:generateContent",
                    headers=self._get_headers(),
                    json=payload,
                    timeout=self.timeout,
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            logger.error("Gemini request failed: %s", e)
            raise AIProviderError(str(e)) from e
        except ValueError as e:
            raise AIProviderError("Reply is not JSON") from e

        try:
            parts = data["candidates"][0]["content"]["parts"]
            text = "".join(part.get("text") or "" for part in parts)
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            logger.warning("Gemini reply has an unexpected shape: %s", e)
            raise AIProviderError("Reply has no content") from e
        return text
