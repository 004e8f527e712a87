"""
Module: core.models.settings

Purpose:
    Provides the PageSettings record - the fixed set of per-page options
    (font, size, line height, template and offsets) with their allowed
    ranges enforced on construction.

Key Classes:
    - TemplateId: Paper template identifier (ruled / plain)
    - FontSpec: Font family and pixel size passed to the measurer
    - PageSettings: Settings for one page in the page set

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - layout.geometry: Offsets and template for the text rectangle
    - layout.flow: Font and line height for a layout pass
    - pages.state: Page sequence
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Tuple


FONT_FAMILIES: Tuple[str, ...] = tuple(f"Font{i}" for i in range(1, 11))

FONT_SIZE_RANGE = (12, 32)
LINE_HEIGHT_RANGE = (18, 50)
X_OFFSET_RANGE = (-50, 150)
Y_OFFSET_RANGE = (-50, 200)


class TemplateId(str, Enum):
    """Paper template identifier."""

    RULED = "ruled"
    PLAIN = "plain"


@dataclass(frozen=True, slots=True)
class FontSpec:
    """
    Font configuration handed to a TextMeasurer.

    Attributes:
        family: Font family identifier (e.g. "Font1")
        size_px: Font size in page units
    """

    family: str
    size_px: float


@dataclass(frozen=True, slots=True)
class PageSettings:
    """
    Settings for a single page (immutable).

    Pages are ordered by page_id, which is also the chaining key for
    overflow: page N's leftover text becomes page N+1's input.

    Attributes:
        page_id: Positive page identifier
        font_family: One of FONT_FAMILIES
        font_size_px: Font size, 12-32
        line_height_px: Distance between baselines, 18-50
        template_id: Paper template
        x_offset_px: Horizontal shift of the text block, -50-150
        y_offset_px: Vertical shift of the text block, -50-200

    Example:
        >>> settings = PageSettings(page_id=1)
        >>> settings.with_changes(font_size_px=24).font_size_px
        24
    """

    page_id: int = 1
    font_family: str = "Font1"
    font_size_px: float = 16
    line_height_px: float = 24
    template_id: TemplateId = TemplateId.RULED
    x_offset_px: float = 0
    y_offset_px: float = 0

    def __post_init__(self) -> None:
        """Validate settings on construction."""
        if not isinstance(self.page_id, int) or self.page_id <= 0:
            raise ValueError(f"page_id must be a positive integer: {self.page_id!r}")
        if self.font_family not in FONT_FAMILIES:
            raise ValueError(f"Unknown font family: {self.font_family!r}")
        if not isinstance(self.template_id, TemplateId):
            try:
                object.__setattr__(self, "template_id", TemplateId(self.template_id))
            except ValueError:
                raise ValueError(f"Unknown template: {self.template_id!r}") from None
        _check_range("font_size_px", self.font_size_px, FONT_SIZE_RANGE)
        _check_range("line_height_px", self.line_height_px, LINE_HEIGHT_RANGE)
        _check_range("x_offset_px", self.x_offset_px, X_OFFSET_RANGE)
        _check_range("y_offset_px", self.y_offset_px, Y_OFFSET_RANGE)

    @property
    def font_spec(self) -> FontSpec:
        """Font used to measure and draw this page's text."""
        return FontSpec(family=self.font_family, size_px=self.font_size_px)

    def with_changes(self, **changes: Any) -> PageSettings:
        """
        Return a copy with the given fields replaced.

        Args:
            **changes: Field names and new values (page_id excluded)

        Returns:
            New validated PageSettings

        Raises:
            ValueError: If a field is unknown, is page_id, or a value is out of range
        """
        allowed = {f.name for f in fields(self)} - {"page_id"}
        unknown = set(changes) - allowed
        if unknown:
            raise ValueError(f"Unknown page settings: {sorted(unknown)}")
        return replace(self, **changes)

    def clone_as(self, page_id: int) -> PageSettings:
        """Copy every setting onto a new page id."""
        return replace(self, page_id=page_id)


def _check_range(name: str, value: float, bounds: Tuple[float, float]) -> None:
    low, high = bounds
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number: {value!r}")
    if not low <= value <= high:
        raise ValueError(f"{name} must be within {low}..{high}: {value}")
