"""
Shared test fixtures for plate geometry tests.
"""
import sys
from pathlib import Path

import numpy as np
import pytest

# Add src/ to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from plate_geometry import PlateGeometry


@pytest.fixture
def straight_plate():
    """Unit segment along X, extruded 1 along Y, 0.5 thick, one subdivision."""
    return PlateGeometry(
        [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0)],
        (0.0, 1.0, 0.0),
        0.5,
        1,
    )


@pytest.fixture
def curved_plate():
    """Three-point bend in the XZ plane, extruded 2 along Y in two steps."""
    return PlateGeometry(
        [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (2.0, 0.0, 1.0)],
        (0.0, 2.0, 0.0),
        0.4,
        2,
    )


@pytest.fixture
def long_plate():
    """2 x 3 x 0.5 box-shaped plate with a subdivided sweep."""
    return PlateGeometry(
        np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [2.0, 0.0, 0.0]]),
        np.array([0.0, 0.0, 3.0]),
        0.5,
        3,
    )


@pytest.fixture
def plate_config_file(tmp_path: Path) -> str:
    path = tmp_path / "plate.json"
    path.write_text(
        '{"points": [[0, 0, 0], [1, 0, 0], [2, 0, 1]],'
        ' "extrusion": [0, 2, 0], "width": 0.4, "subdivisions": 2}',
        encoding="utf-8",
    )
    return str(path)
