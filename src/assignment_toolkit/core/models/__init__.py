"""
Module: core.models

Purpose:
    Immutable records describing per-page settings and fonts.

Key Classes:
    - PageSettings: Settings for a single page
    - FontSpec: Font family and size used for measurement
    - TemplateId: Paper template identifier
"""

from .settings import (
    FONT_FAMILIES,
    FONT_SIZE_RANGE,
    LINE_HEIGHT_RANGE,
    X_OFFSET_RANGE,
    Y_OFFSET_RANGE,
    FontSpec,
    PageSettings,
    TemplateId,
)

__all__ = [
    "FONT_FAMILIES",
    "FONT_SIZE_RANGE",
    "LINE_HEIGHT_RANGE",
    "X_OFFSET_RANGE",
    "Y_OFFSET_RANGE",
    "FontSpec",
    "PageSettings",
    "TemplateId",
]
