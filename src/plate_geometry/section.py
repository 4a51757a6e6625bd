"""
Cross-section analysis of a plate with Shapely.

The plate is a prism: its slice-0 cap translated along the extrusion. The
cross-section is that cap projected onto the plane perpendicular to the
extrusion, which gives the swept volume by Cavalieri's principle.
"""
import numpy as np
from shapely.geometry import MultiPolygon, Polygon

from plate_geometry.plate import DEGENERATE_EPS, PlateGeometry, normalize_or_zero

_X_AXIS = np.array([1.0, 0.0, 0.0])
_Y_AXIS = np.array([0.0, 1.0, 0.0])


def cross_section_polygon(plate: PlateGeometry) -> Polygon:
    """Outline of the plate in the plane perpendicular to its extrusion.

    Returns an empty polygon for a degenerate extrusion. Self-overlapping
    outlines (sharp turns narrower than the width) are cleaned with
    buffer(0) and reduced to the largest part.
    """
    extrusion = plate.extrusion
    if float(extrusion @ extrusion) < DEGENERATE_EPS:
        return Polygon()

    # same seed axis as the normal fallback in compute_normals
    axis = normalize_or_zero(extrusion)
    seed = _X_AXIS if abs(axis[0]) < 0.9 else _Y_AXIS
    u_axis = normalize_or_zero(np.cross(axis, seed))
    v_axis = np.cross(axis, u_axis)

    front_loop, back_loop = plate.slices[0]
    ring = np.vstack([front_loop, back_loop[::-1]])
    coords = [(float(p @ u_axis), float(p @ v_axis)) for p in ring]

    poly = Polygon(coords)
    if not poly.is_valid:
        poly = poly.buffer(0)
    if isinstance(poly, MultiPolygon):
        poly = max(poly.geoms, key=lambda g: g.area)
    return poly


def cross_section_area(plate: PlateGeometry) -> float:
    return float(cross_section_polygon(plate).area)


def swept_volume(plate: PlateGeometry) -> float:
    """Cross-section area times extrusion length."""
    return cross_section_area(plate) * float(np.linalg.norm(plate.extrusion))
