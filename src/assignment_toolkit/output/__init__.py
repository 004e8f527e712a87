"""
Module: output

Purpose:
    Page rendering and export.
    Paints LayoutResults onto Pillow images and writes PNG/PDF files.

Key Functions:
    - render_page(): Render one page
    - draw_template(): Paint template decoration
    - export_png(): One PNG per page
    - export_pdf(): One PDF for all pages

Dependencies:
    - PIL: Image drawing
    - reportlab: PDF generation
"""

from .renderer import render_page, draw_template
from .exporter import export_png, export_pdf

__all__ = [
    "render_page",
    "draw_template",
    "export_png",
    "export_pdf",
]
