"""
Module: output.renderer

Purpose:
    Paint laid-out pages onto Pillow images.
    Draws the paper template (background image or ruled/plain decoration)
    and each laid-out line at the page's text start position.

Key Functions:
    - render_page(): Render one page to an image
    - draw_template(): Paint the decoration-only template

Dependencies:
    - PIL: Image drawing
    - layout: Geometry, fonts and LayoutResult

Used By:
    - pipeline: Document building
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PIL import Image, ImageDraw

from assignment_toolkit.core.models.settings import PageSettings, TemplateId
from assignment_toolkit.layout.config import DEFAULT_PAGE_CONFIG, PageConfig, template_spec
from assignment_toolkit.layout.geometry import geometry_for
from assignment_toolkit.layout.measure import FontRegistry
from assignment_toolkit.layout.models import LayoutResult

logger = logging.getLogger(__name__)

# Default colours
PAPER_COLOR = "#ffffff"
INK_COLOR = "#1d4ed8"
GUIDE_COLOR = "#e0e0e0"
MARGIN_RULE_COLOR = "#ff6b6b"

BACKGROUND_EXTENSIONS = (".png", ".jpg", ".jpeg")


def render_page(
    result: LayoutResult,
    settings: PageSettings,
    *,
    registry: Optional[FontRegistry] = None,
    page_config: PageConfig = DEFAULT_PAGE_CONFIG,
    template_dir: Optional[Path] = None,
    ink_color: str = INK_COLOR,
) -> Image.Image:
    """
    Render a laid-out page.

    Uses <template_dir>/<template>.png|jpg as background when available,
    otherwise draws the template decoration.

    Args:
        result: Layout result for the page
        settings: Settings the page was laid out with
        registry: Fonts (must match the ones used for measuring)
        page_config: Physical page size
        template_dir: Optional directory of template background images
        ink_color: Text colour

    Returns:
        RGB image of the page

    Example:
        >>> image = render_page(result, PageSettings())
        >>> image.size
        (800, 1120)
    """
    registry = registry or FontRegistry()
    size = (page_config.width, page_config.height)

    image = _load_background(template_dir, settings.template_id, size)
    if image is None:
        image = Image.new("RGB", size, color=PAPER_COLOR)
        draw_template(ImageDraw.Draw(image), settings.template_id, page_config)

    draw = ImageDraw.Draw(image)
    font = registry.load(settings.font_spec)
    start_x = geometry_for(settings, page_config).start_x

    for line in result.lines:
        draw.text((start_x, line.baseline_y), line.text, fill=ink_color, font=font)

    logger.debug(f"Rendered page {settings.page_id} with {result.line_count} lines")
    return image


def draw_template(
    draw: ImageDraw.ImageDraw,
    template_id: TemplateId,
    page_config: PageConfig = DEFAULT_PAGE_CONFIG,
) -> None:
    """
    Paint the paper template.

    Ruled paper gets horizontal guide lines from the first text line down
    to the bottom margin plus a vertical margin rule; plain paper is blank.

    Args:
        draw: ImageDraw of the page image
        template_id: Paper template
        page_config: Physical page size
    """
    spec = template_spec(template_id)
    width, height = page_config.width, page_config.height
    draw.rectangle((0, 0, width, height), fill=PAPER_COLOR)

    if spec.guide_spacing:
        y = spec.text_start_y
        while y < page_config.bottom_limit:
            draw.line(
                [(spec.base_margin, y), (width - spec.base_margin, y)],
                fill=GUIDE_COLOR,
                width=1,
            )
            y += spec.guide_spacing

    if spec.margin_rule_x is not None:
        draw.line(
            [(spec.margin_rule_x, spec.margin_rule_top), (spec.margin_rule_x, page_config.bottom_limit)],
            fill=MARGIN_RULE_COLOR,
            width=2,
        )


def _load_background(
    template_dir: Optional[Path],
    template_id: TemplateId,
    size: tuple[int, int],
) -> Optional[Image.Image]:
    """Load a template background image scaled to the page, or None."""
    if template_dir is None:
        return None

    for ext in BACKGROUND_EXTENSIONS:
        path = Path(template_dir) / f"{TemplateId(template_id).value}{ext}"
        if not path.exists():
            continue
        try:
            with Image.open(path) as img:
                return img.convert("RGB").resize(size)
        except (IOError, OSError) as e:
            logger.warning(f"Could not load template background {path}: {e}")
            return None

    return None
