"""
Module: layout.models

Purpose:
    Data models for page layout.
    Immutable dataclasses for the text rectangle, drawn lines and the
    per-page layout result.

Key Classes:
    - TextGeometry: Usable text rectangle of a page
    - DrawnLine: One visual line positioned on a page
    - LayoutResult: Lines drawn plus the text that did not fit

Dependencies:
    - dataclasses (std)

Used By:
    - layout.geometry: Creates TextGeometry
    - layout.flow: Creates LayoutResults
    - output.renderer: Draws LayoutResults
"""

from __future__ import annotations

from dataclasses import dataclass


class InvalidGeometry(ValueError):
    """Text rectangle with no writable width."""
    pass


@dataclass(frozen=True)
class TextGeometry:
    """
    Usable text rectangle for one page.

    Attributes:
        start_x: Left edge of every line
        max_width: Writable width
        start_y: Baseline of the first line
        bottom_limit: Lines may only be drawn while y < bottom_limit

    Example:
        >>> geometry = TextGeometry(start_x=90, max_width=700, start_y=120, bottom_limit=1070)
        >>> geometry.available_height
        950
    """

    start_x: float
    max_width: float
    start_y: float
    bottom_limit: float

    def __post_init__(self) -> None:
        """Reject degenerate rectangles."""
        if self.max_width <= 0:
            raise InvalidGeometry(f"max_width must be positive: {self.max_width}")

    @property
    def available_height(self) -> float:
        """Vertical space between the first baseline and the bottom limit."""
        return self.bottom_limit - self.start_y


@dataclass(frozen=True)
class DrawnLine:
    """
    A visual line placed on a page.

    Attributes:
        text: Words of the line joined by single spaces
        baseline_y: Vertical position of the line
    """

    text: str
    baseline_y: float


@dataclass(frozen=True)
class LayoutResult:
    """
    Output of one layout pass over one page.

    Attributes:
        lines: Lines drawn, top to bottom
        leftover_text: Text that did not fit, structure preserved
        overflowed: True when leftover_text is non-empty

    Example:
        >>> result = LayoutResult(lines=(), leftover_text="", overflowed=False)
        >>> result.line_count
        0
    """

    lines: tuple[DrawnLine, ...]
    leftover_text: str = ""
    overflowed: bool = False

    @property
    def line_count(self) -> int:
        """Number of lines drawn."""
        return len(self.lines)

    @property
    def drawn_text(self) -> str:
        """Drawn lines joined with newlines."""
        return "\n".join(line.text for line in self.lines)
