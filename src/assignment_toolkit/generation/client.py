"""Client for generating assignment text with the Gemini API."""
import logging
from typing import Any, Dict, Optional

import httpx

from . import config

logger = logging.getLogger(__name__)


class GenerationError(Exception):
    """Text generation failed; carries the provider status when there was one."""

    def __init__(self, message: str, status: Optional[int] = None):
        self.message = message
        self.status = status
        super().__init__(message)


class GeminiTextProvider:
    """Turns a prompt into generated text with a single request."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the provider.

        Args:
            api_key: Gemini API key (defaults to GEMINI_API_KEY from environment)
            api_url: generateContent endpoint (defaults to GEMINI_API_URL)
            timeout: Request timeout in seconds
        """
        self.api_key = api_key or config.GEMINI_API_KEY
        if not self.api_key:
            raise ValueError("GEMINI_API_KEY must be provided or set in environment")

        self.api_url = api_url or config.GEMINI_API_URL
        self.timeout = timeout if timeout is not None else config.REQUEST_TIMEOUT

    def build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": config.TEMPERATURE,
                "topK": config.TOP_K,
                "topP": config.TOP_P,
                "maxOutputTokens": config.MAX_OUTPUT_TOKENS,
            },
        }

    def generate(self, prompt: str) -> str:
        """
        Generate text for a prompt.

        Args:
            prompt: User prompt

        Returns:
            Generated text

        Raises:
            GenerationError: On transport errors, non-2xx responses or empty output
        """
        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.post(
                    self.api_url,
                    params={"key": self.api_key},
                    headers={"Content-Type": "application/json"},
                    json=self.build_payload(prompt),
                )
        except httpx.TimeoutException as e:
            logger.error(f"Generation request timed out after {self.timeout}s")
            raise GenerationError(f"Request timeout after {self.timeout}s") from e
        except httpx.RequestError as e:
            logger.error(f"Generation request failed: {e}")
            raise GenerationError(f"Network error: {e}") from e

        if not response.is_success:
            detail = _error_message(response)
            logger.error(f"Generation API returned {response.status_code}: {detail}")
            raise GenerationError(
                f"API Error: {response.status_code} - {detail}",
                status=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise GenerationError("Malformed response from provider", status=response.status_code) from e

        content = _first_candidate_text(data)
        if not content:
            raise GenerationError("No content was generated. Please try again.", status=response.status_code)

        logger.debug(f"Generated {len(content)} characters")
        return content


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return "Unknown error"
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return "Unknown error"


def _first_candidate_text(data: Any) -> Optional[str]:
    try:
        return data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
