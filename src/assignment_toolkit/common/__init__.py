"""Shared helpers."""

from .text_stats import TextWarning, char_count, text_warning, word_count

__all__ = ["TextWarning", "char_count", "text_warning", "word_count"]
