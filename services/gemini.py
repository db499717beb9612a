"""Thin async wrapper around the Gemini API: prompt (+ optional image) in, text out."""

from dataclasses import dataclass

from google import genai
from google.genai import types

from config import settings
from services.exceptions import AIServiceError
from utils.logger import logger


@dataclass(frozen=True)
class ImageInput:
    """Raw image bytes sent alongside a prompt."""

    data: bytes
    mime_type: str = "image/jpeg"


class GeminiClient:
    """Calls Gemini once per request: no retries, no caching, no parsing."""

    def __init__(self, api_key: str | None, model_name: str) -> None:
        self.model_name = model_name
        self._client = genai.Client(api_key=api_key) if api_key else None

    async def generate(self, prompt: str, image: ImageInput | None = None) -> str:
        """
        Generate text for a prompt.

        Args:
            prompt: Prompt text
            image: Optional image to analyze with the prompt

        Returns:
            Raw response text

        Raises:
            AIServiceError: missing API key, transport/quota error, or empty text
        """
        if self._client is None:
            raise AIServiceError("GOOGLE_API_KEY is not configured")

        contents: list = [prompt]
        if image is not None:
            contents.append(types.Part.from_bytes(data=image.data, mime_type=image.mime_type))

        try:
            response = await self._client.aio.models.generate_content(
                model=self.model_name,
                contents=contents,
            )
        except Exception as e:
            logger.error(f"Gemini request failed ({self.model_name}): {e}")
            raise AIServiceError(f"Gemini request failed: {e}") from e

        text = response.text
        if not text or not text.strip():
            raise AIServiceError("Gemini returned an empty response")

        logger.debug(f"Gemini raw response: {text[:500]}")
        return text


_client: GeminiClient | None = None


def get_gemini_client() -> GeminiClient:
    """Build the process-wide client from settings on first use."""
    global _client
    if _client is None:
        _client = GeminiClient(settings.google_api_key, settings.gemini_model)
    return _client
