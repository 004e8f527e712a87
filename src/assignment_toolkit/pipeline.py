"""
Module: pipeline

Purpose:
    Orchestrate the complete document pipeline.
    Source text → Reflow across pages → Render → Export

Key Functions:
    - reflow(): Lay out every page left to right, propagating overflow
    - build_document(): Main entry point for building a document

Key Classes:
    - ReflowResult: Layout results of one reflow walk
    - BuildResult: Complete build result
    - BuildError: Exception for build failures

Dependencies:
    - pages: Page-set controller
    - layout: Flow engine and measurement
    - output: Rendering and export
    - generation: AI text provider

Used By:
    - cli: Command line entry point
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from assignment_toolkit.common.text_stats import text_warning
from assignment_toolkit.generation.client import GeminiTextProvider
from assignment_toolkit.layout.config import DEFAULT_PAGE_CONFIG, PageConfig
from assignment_toolkit.layout.flow import layout_page
from assignment_toolkit.layout.measure import FontRegistry, PillowMeasurer, TextMeasurer
from assignment_toolkit.layout.models import LayoutResult
from assignment_toolkit.output.exporter import export_pdf, export_png
from assignment_toolkit.output.renderer import render_page
from assignment_toolkit.pages.controller import PageSetController, TextProvider
from assignment_toolkit.pages.state import PageSetState

from .config import BuildConfig

logger = logging.getLogger(__name__)


class BuildError(Exception):
    """Error during build pipeline."""
    pass


@dataclass(frozen=True)
class ReflowResult:
    """
    Layout results of one reflow walk.

    Attributes:
        layouts: page_id -> LayoutResult, for every page laid out
        warnings: Reasons the walk stopped early, if any
    """

    layouts: Dict[int, LayoutResult] = field(default_factory=dict)
    warnings: tuple[str, ...] = ()

    @property
    def page_count(self) -> int:
        return len(self.layouts)


@dataclass(frozen=True)
class BuildResult:
    """
    Complete build result (immutable).

    Attributes:
        state: Final page-set snapshot
        layouts: page_id -> LayoutResult
        png_paths: PNG files written
        pdf_path: PDF file written (if requested)
        warnings: Any warnings during build
    """

    state: PageSetState
    layouts: Dict[int, LayoutResult]
    png_paths: tuple[Path, ...]
    pdf_path: Optional[Path]
    warnings: tuple[str, ...]

    @property
    def page_count(self) -> int:
        return len(self.layouts)


def reflow(
    controller: PageSetController,
    measurer: TextMeasurer,
    page_config: PageConfig = DEFAULT_PAGE_CONFIG,
    *,
    max_pages: int = 100,
) -> ReflowResult:
    """
    Lay out the page set from the first page to the last.

    Each page's leftover becomes the next page's text, so pages are laid
    out strictly in order; pages created for overflow during the walk are
    visited by the same walk.

    Stops early when max_pages pages have been laid out or when a page
    draws nothing and passes its whole text on unchanged.

    Args:
        controller: Page set to lay out
        measurer: Text measurement capability
        page_config: Physical page configuration
        max_pages: Upper bound on pages laid out

    Returns:
        ReflowResult with per-page layouts
    """
    layouts: Dict[int, LayoutResult] = {}
    warnings: List[str] = []

    index = 0
    while index < len(controller.pages):
        if index >= max_pages:
            message = f"Stopped after {max_pages} pages; remaining text not laid out"
            logger.warning(message)
            warnings.append(message)
            break

        page_id = controller.pages[index].page_id
        request = controller.request_layout(page_id)
        if request is None:
            break

        result = layout_page(request.text, request.settings, measurer, page_config)
        controller.complete_layout(request, result)
        layouts[page_id] = result

        if result.overflowed and not result.lines and result.leftover_text == request.text.strip():
            message = f"Page {page_id} cannot fit any text; stopping pagination"
            logger.warning(message)
            warnings.append(message)
            break

        index += 1

    logger.info(f"Reflowed text onto {len(layouts)} pages")
    return ReflowResult(layouts=layouts, warnings=tuple(warnings))


def build_document(
    config: BuildConfig,
    *,
    measurer: Optional[TextMeasurer] = None,
    provider: Optional[TextProvider] = None,
) -> BuildResult:
    """
    Build a paginated document from start to finish.

    Pipeline:
    1. Set the source text (given, or generated from the prompt)
    2. Reflow the text across as many pages as needed
    3. Render each page
    4. Export PNG and/or PDF

    Args:
        config: Build configuration
        measurer: Text measurement (defaults to Pillow with config fonts)
        provider: Text provider for prompts (defaults to Gemini)

    Returns:
        BuildResult with layouts and written paths

    Raises:
        BuildError: If the provider cannot be created or output cannot be written

    Example:
        >>> result = build_document(BuildConfig(output_dir=Path("out"), text="Hello"))
        >>> result.page_count
        1
    """
    warnings: List[str] = []
    start_time = time.perf_counter()

    controller = PageSetController(PageSetState(pages=(config.settings.clone_as(1),)))

    # 1. Source text
    if config.prompt is not None:
        if provider is None:
            try:
                provider = GeminiTextProvider()
            except ValueError as e:
                raise BuildError(f"Cannot create text provider: {e}") from e
        if not controller.generate_source_text(provider, config.prompt):
            warnings.append(f"Generation failed: {controller.source_text}")
    else:
        controller.set_source_text(config.text or "")

    advice = text_warning(controller.source_text)
    if advice is not None:
        warnings.append(advice.message)

    # 2. Reflow
    registry = FontRegistry(config.font_dir)
    measurer = measurer or PillowMeasurer(registry)
    reflowed = reflow(controller, measurer, config.page_config, max_pages=config.max_pages)
    warnings.extend(reflowed.warnings)

    # 3. Render
    rendered = [
        (
            page.page_id,
            render_page(
                reflowed.layouts[page.page_id],
                page,
                registry=registry,
                page_config=config.page_config,
                template_dir=config.template_dir,
            ),
        )
        for page in controller.pages
        if page.page_id in reflowed.layouts
    ]

    # 4. Export
    png_paths: List[Path] = []
    pdf_path: Optional[Path] = None
    try:
        if config.wants_png:
            png_paths = export_png(rendered, config.output_dir)
        if config.wants_pdf:
            pdf_path = export_pdf(rendered, config.output_dir / "assignment.pdf")
    except OSError as e:
        raise BuildError(f"Failed to write output: {e}") from e

    elapsed = time.perf_counter() - start_time
    logger.info(f"Document built in {elapsed:.2f}s ({len(rendered)} pages)")

    return BuildResult(
        state=controller.state,
        layouts=reflowed.layouts,
        png_paths=tuple(png_paths),
        pdf_path=pdf_path,
        warnings=tuple(warnings),
    )
