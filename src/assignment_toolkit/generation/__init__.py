"""AI text generation for page 1 source text."""

from .client import GeminiTextProvider, GenerationError

__all__ = ["GeminiTextProvider", "GenerationError"]
