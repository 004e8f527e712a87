"""
Module: layout.config

Purpose:
    Configuration for the page layout engine.
    Defines physical page dimensions, fixed insets and the named
    paper templates whose margins drive the text rectangle.

Key Classes:
    - PageConfig: Immutable physical page configuration
    - TemplateSpec: Margins and decoration values of one template

Dependencies:
    - dataclasses (std)

Used By:
    - layout.geometry: Text rectangle calculation
    - output.renderer: Template decoration
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from assignment_toolkit.core.models.settings import TemplateId


# Physical page canvas in page units
DEFAULT_PAGE_WIDTH = 800
DEFAULT_PAGE_HEIGHT = 1120
DEFAULT_BOTTOM_MARGIN = 50

# Text never starts closer than this to either page edge
EDGE_INSET = 10
MIN_TEXT_WIDTH = 100


@dataclass(frozen=True)
class PageConfig:
    """
    Physical page configuration (immutable).

    Attributes:
        width: Page width in units
        height: Page height in units
        bottom_margin: Reserved space below the last line
        edge_inset: Minimum distance between text and the left/right edges
        min_text_width: Smallest writable width a page may have

    Example:
        >>> config = PageConfig()
        >>> config.bottom_limit
        1070
    """

    width: int = DEFAULT_PAGE_WIDTH
    height: int = DEFAULT_PAGE_HEIGHT
    bottom_margin: int = DEFAULT_BOTTOM_MARGIN
    edge_inset: int = EDGE_INSET
    min_text_width: int = MIN_TEXT_WIDTH

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.width <= 0:
            raise ValueError(f"width must be positive: {self.width}")
        if self.height <= 0:
            raise ValueError(f"height must be positive: {self.height}")
        if self.bottom_margin < 0 or self.bottom_margin >= self.height:
            raise ValueError(f"bottom_margin out of range: {self.bottom_margin}")
        if self.min_text_width <= 0:
            raise ValueError(f"min_text_width must be positive: {self.min_text_width}")
        if self.width - 2 * self.edge_inset < self.min_text_width:
            raise ValueError("Edge insets leave less than the minimum text width")

    @property
    def bottom_limit(self) -> int:
        """Lowest baseline position a line may be drawn above."""
        return self.height - self.bottom_margin


@dataclass(frozen=True)
class TemplateSpec:
    """
    Paper template values shared by geometry and decoration.

    Attributes:
        name: Display name
        base_margin: Left edge of text before offsets
        text_start_y: First baseline before offsets
        guide_spacing: Distance between ruled guide lines (None = no guides)
        margin_rule_x: X position of the vertical margin rule (None = no rule)
        margin_rule_top: Y where the margin rule starts
    """

    name: str
    base_margin: int
    text_start_y: int
    guide_spacing: Optional[int] = None
    margin_rule_x: Optional[int] = None
    margin_rule_top: int = 80

    @property
    def is_decorated(self) -> bool:
        return self.guide_spacing is not None or self.margin_rule_x is not None


TEMPLATES: Dict[TemplateId, TemplateSpec] = {
    TemplateId.RULED: TemplateSpec(
        name="Lined",
        base_margin=90,
        text_start_y=120,
        guide_spacing=30,
        margin_rule_x=120,
    ),
    TemplateId.PLAIN: TemplateSpec(
        name="Plain",
        base_margin=50,
        text_start_y=80,
    ),
}

DEFAULT_PAGE_CONFIG = PageConfig()


def template_spec(template_id: TemplateId) -> TemplateSpec:
    """Look up a template, accepting the enum or its string value."""
    return TEMPLATES[TemplateId(template_id)]
