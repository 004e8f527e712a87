"""
Integration tests for reflow and document building.
"""

import pytest

from assignment_toolkit.config import BuildConfig
from assignment_toolkit.core.models.settings import PageSettings, TemplateId
from assignment_toolkit.generation import config as generation_config
from assignment_toolkit.generation.client import GenerationError
from assignment_toolkit.layout.config import PageConfig
from assignment_toolkit.layout.measure import MonospaceMeasurer
from assignment_toolkit.pages.controller import PageSetController
from assignment_toolkit.pages.state import PageSetState
from assignment_toolkit.pipeline import BuildError, build_document, reflow

# Plain template starts at y=80; the bottom limit is 170, so with a 20px
# line height and half-line paragraph spacing three paragraphs fit a page.
SMALL_PAGE = PageConfig(height=220, bottom_margin=50)
SETTINGS = PageSettings(template_id=TemplateId.PLAIN, font_size_px=20, line_height_px=20)
TEN_PARAGRAPHS = "\n\n".join(f"Line {i}" for i in range(1, 11))


class FakeProvider:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error

    def generate(self, prompt):
        if self.error:
            raise self.error
        return self.text


@pytest.fixture
def controller():
    controller = PageSetController(PageSetState(pages=(SETTINGS,)))
    controller.set_source_text(TEN_PARAGRAPHS)
    return controller


class TestReflow:

    def test_reflow_when_text_overflows_then_pages_created_in_order(self, controller, measurer):
        # Act
        result = reflow(controller, measurer, SMALL_PAGE)

        # Assert
        assert controller.state.page_ids == (1, 2, 3, 4)
        assert result.page_count == 4
        assert [line.text for line in result.layouts[2].lines] == ["Line 4", "Line 5", "Line 6"]
        assert result.layouts[4].leftover_text == ""
        assert result.warnings == ()

    def test_reflow_when_overflow_pages_created_then_settings_copied(self, controller, measurer):
        # Act
        reflow(controller, measurer, SMALL_PAGE)

        # Assert
        assert all(page.template_id == TemplateId.PLAIN for page in controller.pages)
        assert all(page.line_height_px == 20 for page in controller.pages)

    def test_reflow_when_max_pages_reached_then_stops_with_warning(self, controller, measurer):
        # Act
        result = reflow(controller, measurer, SMALL_PAGE, max_pages=2)

        # Assert
        assert result.page_count == 2
        assert "Stopped after 2 pages" in result.warnings[0]

    def test_reflow_when_page_cannot_hold_a_line_then_stops_with_warning(self, measurer):
        # Arrange: text starts at 80 + 150 = 230, below the bottom limit
        settings = SETTINGS.with_changes(y_offset_px=150)
        controller = PageSetController(PageSetState(pages=(settings,)))
        controller.set_source_text("never fits")

        # Act
        result = reflow(controller, measurer, SMALL_PAGE)

        # Assert
        assert result.page_count == 1
        assert "cannot fit any text" in result.warnings[0]

    def test_reflow_when_run_twice_then_same_pages(self, controller, measurer):
        # Act
        first = reflow(controller, measurer, SMALL_PAGE)
        second = reflow(controller, measurer, SMALL_PAGE)

        # Assert
        assert first.layouts == second.layouts
        assert controller.state.page_ids == (1, 2, 3, 4)


class TestBuildDocument:

    def test_build_when_text_and_both_formats_then_png_and_pdf_written(self, tmp_path, measurer):
        # Arrange
        config = BuildConfig(
            output_dir=tmp_path,
            text=TEN_PARAGRAPHS,
            settings=SETTINGS,
            page_config=SMALL_PAGE,
            output_format="both",
        )

        # Act
        result = build_document(config, measurer=measurer)

        # Assert
        assert result.page_count == 4
        assert [p.name for p in result.png_paths] == [f"assignment-page-{i}.png" for i in range(1, 5)]
        assert result.pdf_path == tmp_path / "assignment.pdf"
        assert result.pdf_path.read_bytes().startswith(b"%PDF")

    def test_build_when_short_text_then_length_warning(self, tmp_path, measurer):
        # Act
        result = build_document(BuildConfig(output_dir=tmp_path, text="Hello"), measurer=measurer)

        # Assert
        assert result.page_count == 1
        assert any("Very short assignment (1 words)" in w for w in result.warnings)

    def test_build_when_settings_page_id_not_one_then_starts_at_page_one(self, tmp_path, measurer):
        # Arrange
        config = BuildConfig(output_dir=tmp_path, text="Hello", settings=PageSettings(page_id=5))

        # Act
        result = build_document(config, measurer=measurer)

        # Assert
        assert result.state.page_ids == (1,)

    def test_build_when_prompt_then_generated_text_laid_out(self, tmp_path, measurer):
        # Arrange
        config = BuildConfig(output_dir=tmp_path, prompt="Write about rivers")

        # Act
        result = build_document(config, measurer=measurer, provider=FakeProvider(text="Rivers flow."))

        # Assert
        assert result.state.source_text == "Rivers flow."
        assert result.layouts[1].drawn_text == "Rivers flow."

    def test_build_when_generation_fails_then_error_page_and_warning(self, tmp_path, measurer):
        # Arrange
        config = BuildConfig(output_dir=tmp_path, prompt="Write about rivers")
        provider = FakeProvider(error=GenerationError("Network error: refused"))

        # Act
        result = build_document(config, measurer=measurer, provider=provider)

        # Assert
        assert result.state.source_text == "Error: Network error: refused"
        assert any(w.startswith("Generation failed") for w in result.warnings)
        assert len(result.png_paths) == 1

    def test_build_when_prompt_without_api_key_then_build_error(self, tmp_path, measurer, monkeypatch):
        # Arrange
        monkeypatch.setattr(generation_config, "GEMINI_API_KEY", None)
        config = BuildConfig(output_dir=tmp_path, prompt="Write about rivers")

        # Act & Assert
        with pytest.raises(BuildError, match="Cannot create text provider"):
            build_document(config, measurer=measurer)


class TestBuildConfig:

    def test_config_when_text_and_prompt_then_raises_error(self, tmp_path):
        # Act & Assert
        with pytest.raises(ValueError, match="not both"):
            BuildConfig(output_dir=tmp_path, text="a", prompt="b")

    def test_config_when_neither_text_nor_prompt_then_raises_error(self, tmp_path):
        # Act & Assert
        with pytest.raises(ValueError, match="Either text or prompt"):
            BuildConfig(output_dir=tmp_path)

    def test_config_when_unknown_format_then_raises_error(self, tmp_path):
        # Act & Assert
        with pytest.raises(ValueError, match="output_format"):
            BuildConfig(output_dir=tmp_path, text="a", output_format="svg")

    @pytest.mark.parametrize("output_format,png,pdf", [("png", True, False), ("pdf", False, True), ("both", True, True)])
    def test_config_when_format_then_wanted_outputs(self, tmp_path, output_format, png, pdf):
        # Act
        config = BuildConfig(output_dir=tmp_path, text="a", output_format=output_format)

        # Assert
        assert (config.wants_png, config.wants_pdf) == (png, pdf)
