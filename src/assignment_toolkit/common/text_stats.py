"""
Word and character statistics for source text, with a length warning
shown next to the editor.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

VERY_SHORT_THRESHOLD = 50
SHORT_THRESHOLD = 100
LONG_THRESHOLD = 1000


@dataclass(frozen=True)
class TextWarning:
    kind: str  # "warning" or "info"
    message: str


def word_count(text: str) -> int:
    return len(text.split())


def char_count(text: str) -> int:
    return len(text)


def text_warning(text: str) -> Optional[TextWarning]:
    """Advice on the length of an assignment, or None when it is unremarkable."""
    words = word_count(text)

    if words < VERY_SHORT_THRESHOLD:
        return TextWarning(
            "warning",
            f"Very short assignment ({words} words). Consider adding more content.",
        )
    if words < SHORT_THRESHOLD:
        return TextWarning(
            "info",
            f"Short assignment ({words} words). This might be suitable for a brief task.",
        )
    if words > LONG_THRESHOLD:
        return TextWarning(
            "info",
            f"Long assignment ({words} words). This will likely span multiple pages.",
        )
    return None
