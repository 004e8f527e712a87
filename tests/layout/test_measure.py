"""
Unit tests for text measurement backends.
"""

import pytest

from assignment_toolkit.core.models.settings import FontSpec
from assignment_toolkit.layout.measure import FontRegistry, MonospaceMeasurer, PillowMeasurer


class TestMonospaceMeasurer:

    def test_measure_when_text_then_length_times_advance(self):
        # Arrange
        measurer = MonospaceMeasurer(0.5)

        # Act & Assert
        assert measurer.measure("abcd", FontSpec("Font1", 20)) == 40

    def test_init_when_ratio_not_positive_then_raises_error(self):
        # Act & Assert
        with pytest.raises(ValueError, match="advance_ratio"):
            MonospaceMeasurer(0)


class TestFontRegistry:

    def test_load_when_family_missing_then_falls_back_to_a_font(self, tmp_path):
        # Arrange
        registry = FontRegistry(font_dir=tmp_path, fallbacks=())

        # Act
        font = registry.load(FontSpec("Font7", 16))

        # Assert
        assert font.getlength("abc") > 0

    def test_load_when_called_twice_then_cached(self, tmp_path):
        # Arrange
        registry = FontRegistry(font_dir=tmp_path, fallbacks=())
        spec = FontSpec("Font1", 18)

        # Act & Assert
        assert registry.load(spec) is registry.load(spec)


class TestPillowMeasurer:

    def test_measure_when_empty_then_zero(self):
        # Act & Assert
        assert PillowMeasurer().measure("", FontSpec("Font1", 16)) == 0.0

    def test_measure_when_longer_text_then_wider(self, tmp_path):
        # Arrange
        measurer = PillowMeasurer(FontRegistry(font_dir=tmp_path))
        spec = FontSpec("Font1", 16)

        # Act
        short = measurer.measure("word", spec)
        long = measurer.measure("word word word", spec)

        # Assert
        assert 0 < short < long
