"""Public API for sweeping a thickened polyline into a plate mesh."""

from plate_geometry.config import PlateConfig
from plate_geometry.mesh_builder import plate_to_trimesh, quads_to_trimesh
from plate_geometry.plate import (
    NonPositiveWidthError,
    PlateGeometry,
    PlateGeometryError,
    TooFewPointsError,
    ZeroSubdivisionsError,
)
from plate_geometry.quad import Quad3D

__all__ = [
    "NonPositiveWidthError",
    "PlateConfig",
    "PlateGeometry",
    "PlateGeometryError",
    "Quad3D",
    "TooFewPointsError",
    "ZeroSubdivisionsError",
    "plate_to_trimesh",
    "quads_to_trimesh",
]
