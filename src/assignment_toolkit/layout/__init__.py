"""
Module: layout

Purpose:
    Text layout and pagination engine.
    Measures text against a page's usable rectangle, breaks it into
    lines and reconstructs the leftover text for the next page.

Key Functions:
    - layout(): Lay text out inside a TextGeometry
    - layout_page(): Lay text out for a page's settings
    - compute_geometry(): Usable text rectangle of a page

Key Classes:
    - PageConfig: Physical page configuration
    - TextGeometry: Usable text rectangle
    - LayoutResult: Lines drawn plus leftover text
    - PillowMeasurer: Pillow-backed text measurement

Dependencies:
    - PIL: Font metrics

Used By:
    - pipeline: Reflow of the page set
    - output.renderer: Drawing laid-out pages
"""

from .config import PageConfig, TemplateSpec, TEMPLATES, DEFAULT_PAGE_CONFIG, template_spec
from .models import DrawnLine, InvalidGeometry, LayoutResult, TextGeometry
from .geometry import compute_geometry, geometry_for
from .measure import FontRegistry, MonospaceMeasurer, PillowMeasurer, TextMeasurer
from .flow import layout, layout_page

__all__ = [
    # Config
    "PageConfig",
    "TemplateSpec",
    "TEMPLATES",
    "DEFAULT_PAGE_CONFIG",
    "template_spec",
    # Models
    "DrawnLine",
    "InvalidGeometry",
    "LayoutResult",
    "TextGeometry",
    # Measurement
    "FontRegistry",
    "MonospaceMeasurer",
    "PillowMeasurer",
    "TextMeasurer",
    # Functions
    "compute_geometry",
    "geometry_for",
    "layout",
    "layout_page",
]
