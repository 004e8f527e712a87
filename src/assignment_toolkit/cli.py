"""Command line entry point: paginate text onto paper templates and export pages."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from assignment_toolkit import __version__
from assignment_toolkit.config import OUTPUT_FORMATS, BuildConfig
from assignment_toolkit.core.models.settings import FONT_FAMILIES, PageSettings, TemplateId
from assignment_toolkit.pipeline import BuildError, build_document

logger = logging.getLogger("assignment_toolkit")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="assignment-pages",
        description="Render text onto ruled or plain paper pages, overflowing onto new pages as needed",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("input", nargs="?", type=Path, help="Text file to paginate ('-' for stdin)")
    source.add_argument("--text", type=str, help="Text to paginate")
    source.add_argument("--prompt", type=str, help="Generate the text from this prompt (needs GEMINI_API_KEY)")

    parser.add_argument("--out", type=Path, default=Path("output"), help="Output directory")
    parser.add_argument("--format", choices=OUTPUT_FORMATS, default="png", help="Export format")
    parser.add_argument("--font", choices=FONT_FAMILIES, default="Font1", help="Font family")
    parser.add_argument("--font-size", type=float, default=16, help="Font size (12-32)")
    parser.add_argument("--line-height", type=float, default=24, help="Line height (18-50)")
    parser.add_argument(
        "--template",
        choices=[t.value for t in TemplateId],
        default=TemplateId.RULED.value,
        help="Paper template",
    )
    parser.add_argument("--x-offset", type=float, default=0, help="Horizontal offset (-50-150)")
    parser.add_argument("--y-offset", type=float, default=0, help="Vertical offset (-50-200)")
    parser.add_argument("--font-dir", type=Path, help="Directory containing Font1.ttf .. Font10.ttf")
    parser.add_argument("--template-dir", type=Path, help="Directory containing ruled/plain background images")
    parser.add_argument("--max-pages", type=int, default=100, help="Maximum number of pages")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _read_input(path: Path) -> str:
    if str(path) == "-":
        return sys.stdin.read()
    return path.read_text(encoding="utf-8")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    try:
        settings = PageSettings(
            page_id=1,
            font_family=args.font,
            font_size_px=args.font_size,
            line_height_px=args.line_height,
            template_id=TemplateId(args.template),
            x_offset_px=args.x_offset,
            y_offset_px=args.y_offset,
        )
        text = args.text
        if args.input is not None:
            text = _read_input(args.input)
        config = BuildConfig(
            output_dir=args.out,
            text=text,
            prompt=args.prompt,
            settings=settings,
            output_format=args.format,
            font_dir=args.font_dir,
            template_dir=args.template_dir,
            max_pages=args.max_pages,
        )
    except (ValueError, OSError) as e:
        logger.error(f"Invalid options: {e}")
        return 2

    try:
        result = build_document(config)
    except BuildError as e:
        logger.error(f"Build failed: {e}")
        return 1

    for warning in result.warnings:
        logger.warning(warning)
    for path in result.png_paths:
        logger.info(f"Wrote {path}")
    if result.pdf_path:
        logger.info(f"Wrote {result.pdf_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
