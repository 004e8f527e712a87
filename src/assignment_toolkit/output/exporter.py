"""
Module: output.exporter

Purpose:
    Write rendered pages to disk.
    One PNG per page, and optionally a single PDF with one page per image
    using ReportLab.

Key Functions:
    - export_png(): Write assignment-page-<id>.png files
    - export_pdf(): Write all pages into one PDF

Dependencies:
    - reportlab: PDF generation
    - PIL: Image encoding

Used By:
    - pipeline: Document building
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import List, Sequence, Tuple

from PIL import Image
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

logger = logging.getLogger(__name__)

# Page units are CSS pixels
DEFAULT_DPI = 96
PNG_NAME_TEMPLATE = "assignment-page-{page_id}.png"

RenderedPage = Tuple[int, Image.Image]


def export_png(pages: Sequence[RenderedPage], output_dir: Path) -> List[Path]:
    """
    Save each rendered page as a PNG.

    Args:
        pages: (page_id, image) pairs
        output_dir: Directory to write into (created if missing)

    Returns:
        Paths written, in page order

    Example:
        >>> export_png([(1, image)], Path("out"))
        [PosixPath('out/assignment-page-1.png')]
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    for page_id, image in pages:
        path = output_dir / PNG_NAME_TEMPLATE.format(page_id=page_id)
        image.save(path, format="PNG")
        written.append(path)
    logger.info(f"Exported {len(written)} PNG pages to {output_dir}")
    return written


def export_pdf(pages: Sequence[RenderedPage], output_path: Path, *, dpi: int = DEFAULT_DPI) -> Path:
    """
    Save all rendered pages into one PDF.

    Each image fills one PDF page sized from its pixel dimensions.

    Args:
        pages: (page_id, image) pairs
        output_path: PDF file to write
        dpi: Pixel density used to convert page size to points

    Returns:
        output_path

    Raises:
        IOError: If the PDF cannot be written
    """
    if not pages:
        logger.warning("No pages to export, creating empty PDF")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    c = canvas.Canvas(str(output_path))

    for _, image in pages:
        width_pt = _px_to_pt(image.width, dpi)
        height_pt = _px_to_pt(image.height, dpi)
        c.setPageSize((width_pt, height_pt))
        c.drawImage(_image_reader(image), 0, 0, width=width_pt, height=height_pt)
        c.showPage()

    c.save()
    logger.info(f"Exported {len(pages)} pages to {output_path}")
    return output_path


def _image_reader(img: Image.Image) -> ImageReader:
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return ImageReader(buf)


def _px_to_pt(px: int, dpi: int = DEFAULT_DPI) -> float:
    """Convert pixels to PDF points (1/72 inch)."""
    return px * 72.0 / dpi
