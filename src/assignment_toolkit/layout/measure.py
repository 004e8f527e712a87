"""
Module: layout.measure

Purpose:
    Text measurement capability consumed by the flow engine.
    Given a string and a font, return its rendered width in page units.

Key Classes:
    - TextMeasurer: Protocol for measurement backends
    - FontRegistry: Resolves font families to loaded Pillow fonts
    - PillowMeasurer: Measures with Pillow's FreeType fonts
    - MonospaceMeasurer: Fixed advance per character (headless/testing)

Dependencies:
    - PIL: Font loading and text metrics

Used By:
    - layout.flow: Line packing
    - output.renderer: Drawing with the same fonts used for measurement
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Protocol, Sequence, Tuple, Union

from PIL import ImageFont

from assignment_toolkit.core.models.settings import FontSpec

logger = logging.getLogger(__name__)

PillowFont = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]

# Tried in order when a family has no font file of its own
FALLBACK_FONTS: Tuple[str, ...] = (
    "DejaVuSans.ttf",
    "arial.ttf",
    "Arial.ttf",
    "LiberationSans-Regular.ttf",
)
FONT_EXTENSIONS: Tuple[str, ...] = (".ttf", ".otf")


class TextMeasurer(Protocol):
    """Anything that can report the rendered width of a string."""

    def measure(self, text: str, font: FontSpec) -> float:
        ...


class MonospaceMeasurer:
    """
    Measures every character as a fixed fraction of the font size.

    Deterministic and font-free, so layouts are reproducible without any
    font files installed.

    Example:
        >>> MonospaceMeasurer(0.5).measure("abcd", FontSpec("Font1", 20))
        40.0
    """

    def __init__(self, advance_ratio: float = 0.5) -> None:
        if advance_ratio <= 0:
            raise ValueError(f"advance_ratio must be positive: {advance_ratio}")
        self.advance_ratio = advance_ratio

    def measure(self, text: str, font: FontSpec) -> float:
        return len(text) * font.size_px * self.advance_ratio


class FontRegistry:
    """
    Loads and caches fonts for the page font families.

    A family "Font3" is looked up as Font3.ttf / Font3.otf in font_dir.
    Missing families fall back to common system fonts and finally to
    Pillow's bundled default font, so loading never fails.
    """

    def __init__(
        self,
        font_dir: Optional[Path] = None,
        fallbacks: Sequence[str] = FALLBACK_FONTS,
    ) -> None:
        self.font_dir = Path(font_dir) if font_dir else None
        self.fallbacks = tuple(fallbacks)
        self._cache: Dict[Tuple[str, float], PillowFont] = {}
        self._warned: set[str] = set()

    def load(self, font: FontSpec) -> PillowFont:
        """
        Resolve a font, loading it on first use.

        Args:
            font: Family and size

        Returns:
            Pillow font object ready for measuring and drawing
        """
        key = (font.family, float(font.size_px))
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        loaded = self._load_uncached(font)
        self._cache[key] = loaded
        return loaded

    def _load_uncached(self, font: FontSpec) -> PillowFont:
        for candidate in self._candidates(font.family):
            try:
                return ImageFont.truetype(candidate, font.size_px)
            except (IOError, OSError):
                continue

        if font.family not in self._warned:
            logger.warning(f"Could not load font {font.family!r}, using default font")
            self._warned.add(font.family)
        return ImageFont.load_default(size=font.size_px)

    def _candidates(self, family: str) -> list[str]:
        candidates: list[str] = []
        if self.font_dir is not None:
            for ext in FONT_EXTENSIONS:
                path = self.font_dir / f"{family}{ext}"
                if path.exists():
                    candidates.append(str(path))
        candidates.extend(f"{family}{ext}" for ext in FONT_EXTENSIONS)
        candidates.extend(self.fallbacks)
        return candidates


class PillowMeasurer:
    """
    Measures text with the fonts the renderer draws with.

    Example:
        >>> measurer = PillowMeasurer(FontRegistry())
        >>> measurer.measure("", FontSpec("Font1", 16))
        0.0
    """

    def __init__(self, registry: Optional[FontRegistry] = None) -> None:
        self.registry = registry or FontRegistry()

    def measure(self, text: str, font: FontSpec) -> float:
        if not text:
            return 0.0
        return float(self.registry.load(font).getlength(text))
