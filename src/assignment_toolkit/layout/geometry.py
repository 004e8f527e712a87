"""
Module: layout.geometry

Purpose:
    Compute the usable text rectangle of a page from its template,
    its horizontal/vertical offsets and the physical page size.

Key Functions:
    - compute_geometry(): Text rectangle for explicit inputs
    - geometry_for(): Text rectangle for a PageSettings record

Dependencies:
    - layout.config: Template margins and page insets
    - layout.models: TextGeometry

Used By:
    - layout.flow: layout_page()
    - output.renderer: Line x position
"""

from __future__ import annotations

from typing import Optional

from assignment_toolkit.core.models.settings import PageSettings, TemplateId

from .config import DEFAULT_PAGE_CONFIG, PageConfig, template_spec
from .models import TextGeometry


def compute_geometry(
    template_id: TemplateId,
    x_offset: float,
    y_offset: float,
    page_width: float,
    page_height: float,
    *,
    page_config: PageConfig = DEFAULT_PAGE_CONFIG,
) -> TextGeometry:
    """
    Calculate the text rectangle for a page.

    The left edge is clamped so text never starts off-page and always
    leaves at least min_text_width before the right inset. The width is
    floored at min_text_width.

    Args:
        template_id: Paper template
        x_offset: Horizontal shift applied to the template margin
        y_offset: Vertical shift applied to the template start line
        page_width: Physical page width
        page_height: Physical page height
        page_config: Insets and bottom margin

    Returns:
        TextGeometry for the page

    Example:
        >>> compute_geometry(TemplateId.RULED, 0, 0, 800, 1120)
        TextGeometry(start_x=90, max_width=700, start_y=120, bottom_limit=1070)
    """
    spec = template_spec(template_id)
    inset = page_config.edge_inset
    min_width = page_config.min_text_width

    right_edge = page_width - inset
    start_x = max(inset, min(spec.base_margin + x_offset, right_edge - min_width))
    max_width = max(min_width, right_edge - start_x)

    return TextGeometry(
        start_x=start_x,
        max_width=max_width,
        start_y=spec.text_start_y + y_offset,
        bottom_limit=page_height - page_config.bottom_margin,
    )


def geometry_for(
    settings: PageSettings,
    page_config: Optional[PageConfig] = None,
) -> TextGeometry:
    """Text rectangle for a page's settings on the configured page size."""
    config = page_config or DEFAULT_PAGE_CONFIG
    return compute_geometry(
        settings.template_id,
        settings.x_offset_px,
        settings.y_offset_px,
        config.width,
        config.height,
        page_config=config,
    )
