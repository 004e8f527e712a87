"""
Module: config

Purpose:
    Configuration dataclass for building a paginated document. Immutable
    configuration with validation on construction.

Key Classes:
    - BuildConfig: Main configuration for building documents

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - pipeline: build_document()
    - cli: Command line options
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from assignment_toolkit.core.models.settings import PageSettings
from assignment_toolkit.layout.config import DEFAULT_PAGE_CONFIG, PageConfig

OUTPUT_FORMATS = ("png", "pdf", "both")


@dataclass(frozen=True)
class BuildConfig:
    """
    Configuration for building a document (immutable).

    Exactly one of text or prompt supplies the source text.

    Attributes:
        output_dir: Directory for exported files
        text: Source text for page 1
        prompt: Prompt for generated source text
        settings: Settings of page 1 (copied onto overflow pages)
        page_config: Physical page configuration
        output_format: "png", "pdf" or "both"
        font_dir: Directory with Font1.ttf .. Font10.ttf
        template_dir: Directory with ruled/plain background images
        max_pages: Stop paginating after this many pages

    Example:
        >>> config = BuildConfig(output_dir=Path("out"), text="Hello")
    """

    output_dir: Path
    text: Optional[str] = None
    prompt: Optional[str] = None

    settings: PageSettings = field(default_factory=PageSettings)
    page_config: PageConfig = DEFAULT_PAGE_CONFIG

    output_format: str = "png"
    font_dir: Optional[Path] = None
    template_dir: Optional[Path] = None
    max_pages: int = 100

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.text is None and self.prompt is None:
            raise ValueError("Either text or prompt must be provided")
        if self.text is not None and self.prompt is not None:
            raise ValueError("Provide text or prompt, not both")
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(f"output_format must be one of {OUTPUT_FORMATS}: {self.output_format!r}")
        if self.max_pages <= 0:
            raise ValueError(f"max_pages must be positive: {self.max_pages}")

    @property
    def wants_png(self) -> bool:
        return self.output_format in ("png", "both")

    @property
    def wants_pdf(self) -> bool:
        return self.output_format in ("pdf", "both")
