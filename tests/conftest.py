import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import assignment_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from assignment_toolkit.core.models.settings import FontSpec
from assignment_toolkit.layout.measure import MonospaceMeasurer
from assignment_toolkit.layout.models import TextGeometry


# Common test fixtures
@pytest.fixture
def measurer():
    """Every character is half the font size wide."""
    return MonospaceMeasurer(0.5)


@pytest.fixture
def font():
    """20px font: 10 units per character with the monospace measurer."""
    return FontSpec(family="Font1", size_px=20)


@pytest.fixture
def geometry_factory():
    """Factory for small text rectangles."""
    def _create(max_width: float = 100, start_y: float = 0, bottom_limit: float = 1000, start_x: float = 0):
        return TextGeometry(
            start_x=start_x,
            max_width=max_width,
            start_y=start_y,
            bottom_limit=bottom_limit,
        )
    return _create
