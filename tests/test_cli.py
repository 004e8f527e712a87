"""
Tests for the assignment-pages command line.
"""

from assignment_toolkit.cli import main


class TestMain:

    def test_main_when_text_given_then_page_written(self, tmp_path):
        # Act
        code = main(["--text", "Hello", "--out", str(tmp_path), "--template", "plain"])

        # Assert
        assert code == 0
        assert (tmp_path / "assignment-page-1.png").exists()

    def test_main_when_input_file_given_then_pdf_written(self, tmp_path):
        # Arrange
        source = tmp_path / "essay.txt"
        source.write_text("First paragraph.\n\nSecond paragraph.", encoding="utf-8")
        out = tmp_path / "out"

        # Act
        code = main([str(source), "--out", str(out), "--format", "pdf"])

        # Assert
        assert code == 0
        assert (out / "assignment.pdf").exists()
        assert not (out / "assignment-page-1.png").exists()

    def test_main_when_font_size_out_of_range_then_usage_error(self, tmp_path):
        # Act & Assert
        assert main(["--text", "Hello", "--out", str(tmp_path), "--font-size", "40"]) == 2

    def test_main_when_input_file_missing_then_usage_error(self, tmp_path):
        # Act & Assert
        assert main([str(tmp_path / "missing.txt"), "--out", str(tmp_path)]) == 2
