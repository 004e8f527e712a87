"""
Module: layout.flow

Purpose:
    Greedy word-wrap with paragraph breaks for a single page.
    Produces the lines drawn on the page and the exact leftover text
    that did not fit, ready to be fed to the next page.

Key Functions:
    - layout(): Lay text out inside a TextGeometry
    - layout_page(): Lay text out for a page's settings

Algorithm:
    1. Split text into paragraphs on blank-line boundaries
    2. Split each paragraph into source lines on single line breaks
    3. Pack words into visual lines while they fit max_width
    4. Before committing any line, stop if the cursor reached bottom_limit;
       everything not yet drawn becomes leftover text
    5. Add half a line of spacing between fully drawn paragraphs

Dependencies:
    - layout.models: TextGeometry, DrawnLine, LayoutResult
    - layout.measure: TextMeasurer

Used By:
    - pipeline: Page-by-page reflow
"""

from __future__ import annotations

import logging
import re
from typing import Callable, List, Optional, Sequence

from assignment_toolkit.core.models.settings import FontSpec, PageSettings

from .config import PageConfig
from .geometry import geometry_for
from .measure import TextMeasurer
from .models import DrawnLine, InvalidGeometry, LayoutResult, TextGeometry

logger = logging.getLogger(__name__)

PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
PARAGRAPH_SEPARATOR = "\n\n"
LINE_SEPARATOR = "\n"
PARAGRAPH_SPACING = 0.5

# Used only when the measurer fails
APPROX_CHAR_ADVANCE = 0.5


def layout(
    text: str,
    font: FontSpec,
    line_height: float,
    geometry: TextGeometry,
    measurer: TextMeasurer,
) -> LayoutResult:
    """
    Lay out text on one page.

    Pure function: identical arguments always produce identical results.
    Words are never split; a word wider than max_width is drawn alone.

    Args:
        text: Text to place on the page
        font: Font used for measurement
        line_height: Distance between successive baselines
        geometry: Usable text rectangle
        measurer: Text measurement capability

    Returns:
        LayoutResult with drawn lines and leftover text

    Example:
        >>> result = layout("Hello world", font, 24, geometry, measurer)
        >>> [line.text for line in result.lines]
        ['Hello world']
    """
    paragraphs = PARAGRAPH_BREAK.split(text.replace("\r\n", "\n"))
    width_of = _width_function(measurer, font)
    bottom = geometry.bottom_limit

    drawn: List[DrawnLine] = []
    y = geometry.start_y

    for para_idx, paragraph in enumerate(paragraphs):
        later_paragraphs = paragraphs[para_idx + 1:]

        if y >= bottom:
            return _overflow(drawn, paragraphs[para_idx:])

        source_lines = paragraph.split(LINE_SEPARATOR)
        for line_idx, line in enumerate(source_lines):
            later_lines = source_lines[line_idx + 1:]

            if y >= bottom:
                remainder = LINE_SEPARATOR.join(source_lines[line_idx:])
                return _overflow(drawn, [remainder, *later_paragraphs])

            if not line.strip():
                y += line_height
                continue

            words = line.split()
            buffer: List[str] = []
            for word_idx, word in enumerate(words):
                if buffer and width_of(" ".join([*buffer, word])) > geometry.max_width:
                    if y >= bottom:
                        head = " ".join([*buffer, *words[word_idx:]])
                        remainder = LINE_SEPARATOR.join([head, *later_lines])
                        return _overflow(drawn, [remainder, *later_paragraphs])
                    drawn.append(DrawnLine(text=" ".join(buffer), baseline_y=y))
                    y += line_height
                    buffer = [word]
                else:
                    buffer.append(word)

            if buffer:
                if y >= bottom:
                    remainder = LINE_SEPARATOR.join([" ".join(buffer), *later_lines])
                    return _overflow(drawn, [remainder, *later_paragraphs])
                drawn.append(DrawnLine(text=" ".join(buffer), baseline_y=y))
                y += line_height

        if later_paragraphs:
            y += line_height * PARAGRAPH_SPACING

    return LayoutResult(lines=tuple(drawn), leftover_text="", overflowed=False)


def layout_page(
    text: str,
    settings: PageSettings,
    measurer: TextMeasurer,
    page_config: Optional[PageConfig] = None,
) -> LayoutResult:
    """
    Lay out text using a page's template, offsets, font and line height.

    A degenerate text rectangle skips layout: no lines are drawn and the
    whole text is reported as leftover.

    Args:
        text: Text shown on the page
        settings: Page settings
        measurer: Text measurement capability
        page_config: Physical page configuration

    Returns:
        LayoutResult for the page
    """
    try:
        geometry = geometry_for(settings, page_config)
    except InvalidGeometry as e:
        logger.warning(f"Skipping layout for page {settings.page_id}: {e}")
        leftover = text.strip()
        return LayoutResult(lines=(), leftover_text=leftover, overflowed=bool(leftover))

    result = layout(text, settings.font_spec, settings.line_height_px, geometry, measurer)
    logger.debug(
        f"Page {settings.page_id}: {result.line_count} lines, "
        f"{len(result.leftover_text)} chars left over"
    )
    return result


def _overflow(drawn: List[DrawnLine], parts: Sequence[str]) -> LayoutResult:
    """Build the result for a pass stopped at the bottom limit."""
    leftover = PARAGRAPH_SEPARATOR.join(part for part in parts if part).strip()
    return LayoutResult(lines=tuple(drawn), leftover_text=leftover, overflowed=bool(leftover))


def _width_function(measurer: TextMeasurer, font: FontSpec) -> Callable[[str], float]:
    """
    Wrap the measurer so a failing measurement never aborts the page.

    On failure the width is approximated from the character count.
    """
    warned = False

    def width_of(candidate: str) -> float:
        nonlocal warned
        try:
            return measurer.measure(candidate, font)
        except (OSError, ValueError) as e:
            if not warned:
                logger.warning(f"Measurement failed for {font.family!r}, approximating: {e}")
                warned = True
            return len(candidate) * font.size_px * APPROX_CHAR_ADVANCE

    return width_of
