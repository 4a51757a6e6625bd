"""
Plate-shaped solid generated by sweeping a 3D polyline along an extrusion vector.

The polyline is thickened by a fixed width and swept along the extrusion in
``subdivisions`` steps. Construction runs four stages eagerly:

1. Arc lengths along the polyline (feeds the U coordinate).
2. One thickness-direction normal per polyline point.
3. Front/back offset loops (points displaced by +/- width/2 along the normals).
4. The slice grid: both loops translated to ``subdivisions + 1`` positions
   along the extrusion.

The six face methods are read-only views over the slice grid. Each emits
``Quad3D`` objects whose corners carry canonical UVW coordinates:

- (0,0,0) is the front-top-left corner, (1,1,1) the back-bottom-right corner
- U: progress along the polyline (0 to 1)
- V: progress along the extrusion (0 to 1)
- W: side across the width (0 = front, 1 = back)
"""
import logging
import math
import operator
from typing import Callable, Dict, List, Optional, Sequence, Tuple, TypeVar

import numpy as np

from plate_geometry.quad import Quad3D

logger = logging.getLogger(__name__)

P = TypeVar("P")
VertexMapper = Callable[[np.ndarray, np.ndarray], P]

DEGENERATE_EPS = 1e-6

_X_AXIS = np.array([1.0, 0.0, 0.0])
_Y_AXIS = np.array([0.0, 1.0, 0.0])


class PlateGeometryError(ValueError):
    """Base exception for invalid plate inputs."""
    pass


class TooFewPointsError(PlateGeometryError):
    """The polyline has fewer than two points."""
    pass


class NonPositiveWidthError(PlateGeometryError):
    """The plate width is zero, negative, infinite or NaN."""
    pass


class ZeroSubdivisionsError(PlateGeometryError):
    """Fewer than one subdivision was requested in strict mode."""
    pass


# ─── Vector helpers ──────────────────────────────────────────────────────────

def normalize_or_zero(v: np.ndarray) -> np.ndarray:
    """Return v scaled to unit length, or the zero vector if that is impossible."""
    length = float(np.linalg.norm(v))
    if length > 0.0 and np.isfinite(length):
        return v / length
    return np.zeros(3)


def _as_points(points) -> np.ndarray:
    try:
        arr = np.array(points, dtype=float)
    except (TypeError, ValueError) as exc:
        raise PlateGeometryError(f"Points are not numeric: {exc}") from exc
    if arr.ndim == 1 and arr.size == 0:
        arr = arr.reshape(0, 3)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise PlateGeometryError(
            f"Points must have shape (N, 3), got {arr.shape}"
        )
    if len(arr) < 2:
        raise TooFewPointsError("PlateGeometry requires at least 2 points")
    if not np.all(np.isfinite(arr)):
        raise PlateGeometryError("Points must be finite")
    return arr


def _as_vector(value, name: str) -> np.ndarray:
    try:
        arr = np.array(value, dtype=float)
    except (TypeError, ValueError) as exc:
        raise PlateGeometryError(f"{name} is not numeric: {exc}") from exc
    if arr.shape != (3,):
        raise PlateGeometryError(f"{name} must have shape (3,), got {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise PlateGeometryError(f"{name} must be finite")
    return arr


def _frozen(arr: np.ndarray) -> np.ndarray:
    arr.flags.writeable = False
    return arr


# ─── Construction stages ─────────────────────────────────────────────────────

def compute_arc_lengths(points: np.ndarray) -> Tuple[np.ndarray, float]:
    """Cumulative distance along the polyline.

    Returns:
        (arc_lengths, total) where arc_lengths[0] == 0 and
        arc_lengths[i] = arc_lengths[i-1] + |points[i] - points[i-1]|.
    """
    segment_lengths = np.linalg.norm(np.diff(points, axis=0), axis=1)
    arc_lengths = np.concatenate([[0.0], np.cumsum(segment_lengths)])
    return arc_lengths, float(arc_lengths[-1])


def compute_normals(points: np.ndarray, extrusion: np.ndarray) -> np.ndarray:
    """Thickness direction at each point, perpendicular to tangent and extrusion.

    Interior tangents are the normalized sum of the unit incoming and outgoing
    edge directions. Two fallbacks keep the result non-zero:

    - near-zero extrusion: every normal is (1, 0, 0)
    - tangent parallel to extrusion: extrusion x (1,0,0), or extrusion x (0,1,0)
      when the extrusion is nearly aligned with X
    """
    n_points = len(points)
    if float(extrusion @ extrusion) < DEGENERATE_EPS:
        logger.warning(
            "Degenerate extrusion %s, using constant (1, 0, 0) normals",
            extrusion.tolist(),
        )
        return np.tile(_X_AXIS, (n_points, 1))

    extrusion_dir = normalize_or_zero(extrusion)
    normals = np.empty((n_points, 3))

    for i in range(n_points):
        if i == 0:
            tangent = normalize_or_zero(points[1] - points[0])
        elif i == n_points - 1:
            tangent = normalize_or_zero(points[i] - points[i - 1])
        else:
            incoming = normalize_or_zero(points[i] - points[i - 1])
            outgoing = normalize_or_zero(points[i + 1] - points[i])
            tangent = normalize_or_zero(incoming + outgoing)

        normal = normalize_or_zero(np.cross(tangent, extrusion_dir))

        if float(normal @ normal) < DEGENERATE_EPS:
            seed = _X_AXIS if abs(extrusion_dir[0]) < 0.9 else _Y_AXIS
            normal = normalize_or_zero(np.cross(extrusion_dir, seed))

        normals[i] = normal

    return normals


def compute_offset_loops(
    points: np.ndarray,
    normals: np.ndarray,
    width: float,
) -> Tuple[np.ndarray, np.ndarray]:
    """Displace each point by +/- width/2 along its normal.

    Returns:
        (front_loop, back_loop), both in the same order as points.
    """
    half_width = width * 0.5
    return points + normals * half_width, points - normals * half_width


def compute_slices(
    front_loop: np.ndarray,
    back_loop: np.ndarray,
    extrusion: np.ndarray,
    subdivisions: int,
) -> Tuple[np.ndarray, np.ndarray]:
    """Replicate both loops at subdivisions + 1 positions along the extrusion.

    Returns:
        (front_slices, back_slices), each of shape (subdivisions + 1, N, 3).
        Slice 0 is untranslated, the last slice is moved by the full extrusion.
    """
    t = np.arange(subdivisions + 1, dtype=float) / subdivisions
    offsets = t[:, None] * extrusion[None, :]
    front_slices = front_loop[None, :, :] + offsets[:, None, :]
    back_slices = back_loop[None, :, :] + offsets[:, None, :]
    return front_slices, back_slices


def _position_only(pos: np.ndarray, uvw: np.ndarray) -> np.ndarray:
    return pos


# ─── PlateGeometry ───────────────────────────────────────────────────────────

class PlateGeometry:
    """A closed six-sided plate built from a polyline, extrusion, and width.

    Args:
        points: Polyline to sweep, shape (N, 3) with N >= 2.
        extrusion: Sweep direction and length.
        width: Plate thickness, must be finite and > 0.
        subdivisions: Segments along the extrusion. Values below 1 are
            clamped to 1, unless ``strict`` is set, in which case they raise
            ZeroSubdivisionsError.
    """

    FACE_NAMES = ("front", "back", "left", "right", "top", "bottom")

    def __init__(
        self,
        points: Sequence[Sequence[float]],
        extrusion: Sequence[float],
        width: float,
        subdivisions: int = 1,
        strict: bool = False,
    ):
        points = _as_points(points)
        extrusion = _as_vector(extrusion, "Extrusion")

        try:
            width = float(width)
        except (TypeError, ValueError) as exc:
            raise PlateGeometryError(f"Width is not numeric: {exc}") from exc
        if not (width > 0.0 and math.isfinite(width)):
            raise NonPositiveWidthError(
                f"PlateGeometry width must be positive and finite, got {width}"
            )

        try:
            subdivisions = operator.index(subdivisions)
        except TypeError as exc:
            raise PlateGeometryError(
                f"Subdivisions must be an integer, got {subdivisions!r}"
            ) from exc
        if subdivisions < 1:
            if strict:
                raise ZeroSubdivisionsError(
                    f"PlateGeometry requires at least 1 subdivision, got {subdivisions}"
                )
            logger.warning("Clamping subdivisions %d to 1", subdivisions)
            subdivisions = 1

        arc_lengths, total_arc_length = compute_arc_lengths(points)
        normals = compute_normals(points, extrusion)
        front_loop, back_loop = compute_offset_loops(points, normals, width)
        front_slices, back_slices = compute_slices(
            front_loop, back_loop, extrusion, subdivisions,
        )

        self._points = _frozen(points)
        self._extrusion = _frozen(extrusion)
        self._extrusion_dir = _frozen(normalize_or_zero(extrusion))
        self._width = width
        self._subdivisions = subdivisions
        self._arc_lengths = _frozen(arc_lengths)
        self._total_arc_length = total_arc_length
        self._normals = _frozen(normals)
        self._front_slices = _frozen(front_slices)
        self._back_slices = _frozen(back_slices)

        logger.debug(
            "Built plate: %d points, %d subdivisions, arc length %.4f",
            len(points), subdivisions, total_arc_length,
        )

    # Read-only state

    @property
    def points(self) -> np.ndarray:
        return self._points

    @property
    def extrusion(self) -> np.ndarray:
        return self._extrusion

    @property
    def width(self) -> float:
        return self._width

    @property
    def subdivisions(self) -> int:
        return self._subdivisions

    @property
    def arc_lengths(self) -> np.ndarray:
        return self._arc_lengths

    @property
    def total_arc_length(self) -> float:
        return self._total_arc_length

    @property
    def normals(self) -> np.ndarray:
        """Per-point thickness direction."""
        return self._normals

    @property
    def slices(self) -> List[Tuple[np.ndarray, np.ndarray]]:
        """(front_loop, back_loop) for each of the subdivisions + 1 slices."""
        return list(zip(self._front_slices, self._back_slices))

    def compute_uvw(self, point_idx: int, slice_idx: int, is_back: bool) -> np.ndarray:
        """Canonical (u, v, w) for a slice-grid vertex."""
        if self._total_arc_length > 0.0:
            u = self._arc_lengths[point_idx] / self._total_arc_length
        else:
            u = 0.0
        v = slice_idx / self._subdivisions
        w = 1.0 if is_back else 0.0
        return np.array([u, v, w])

    def _corner(self, f, point_idx: int, slice_idx: int, is_back: bool):
        grid = self._back_slices if is_back else self._front_slices
        return f(grid[slice_idx, point_idx], self.compute_uvw(point_idx, slice_idx, is_back))

    # Front / back caps

    def front_face(self) -> List[Quad3D]:
        """Cap at the start of the extrusion."""
        return self.front_face_f(_position_only)

    def front_face_f(self, f: VertexMapper) -> List[Quad3D]:
        """Front cap; f receives (position, uvw) for every corner."""
        slice_idx = 0
        normal = -self._extrusion_dir
        quads = []

        for i in range(len(self._points) - 1):
            quads.append(Quad3D(
                top_left=self._corner(f, i, slice_idx, False),
                top_right=self._corner(f, i + 1, slice_idx, False),
                bottom_left=self._corner(f, i, slice_idx, True),
                bottom_right=self._corner(f, i + 1, slice_idx, True),
                normal=normal.copy(),
            ))

        return quads

    def back_face(self) -> List[Quad3D]:
        """Cap at the end of the extrusion."""
        return self.back_face_f(_position_only)

    def back_face_f(self, f: VertexMapper) -> List[Quad3D]:
        slice_idx = self._subdivisions
        normal = self._extrusion_dir
        quads = []

        for i in range(len(self._points) - 1):
            quads.append(Quad3D(
                top_left=self._corner(f, i, slice_idx, True),
                top_right=self._corner(f, i + 1, slice_idx, True),
                bottom_left=self._corner(f, i, slice_idx, False),
                bottom_right=self._corner(f, i + 1, slice_idx, False),
                normal=normal.copy(),
            ))

        return quads

    # Long sides, swept along the extrusion

    def left_face(self) -> List[Quad3D]:
        """Side traced by the front loop."""
        return self.left_face_f(_position_only)

    def left_face_f(self, f: VertexMapper) -> List[Quad3D]:
        quads = []

        for slice_idx in range(self._subdivisions):
            loop = self._front_slices[slice_idx]
            for i in range(len(self._points) - 1):
                edge_dir = normalize_or_zero(loop[i + 1] - loop[i])
                normal = normalize_or_zero(np.cross(edge_dir, self._extrusion_dir))

                quads.append(Quad3D(
                    top_left=self._corner(f, i, slice_idx, False),
                    top_right=self._corner(f, i + 1, slice_idx, False),
                    bottom_left=self._corner(f, i, slice_idx + 1, False),
                    bottom_right=self._corner(f, i + 1, slice_idx + 1, False),
                    normal=normal.copy(),
                ))

        return quads

    def right_face(self) -> List[Quad3D]:
        """Side traced by the back loop."""
        return self.right_face_f(_position_only)

    def right_face_f(self, f: VertexMapper) -> List[Quad3D]:
        quads = []

        for slice_idx in range(self._subdivisions):
            loop = self._back_slices[slice_idx]
            for i in range(len(self._points) - 1):
                edge_dir = normalize_or_zero(loop[i + 1] - loop[i])
                normal = -normalize_or_zero(np.cross(edge_dir, self._extrusion_dir))

                # Mirrored along the polyline so the quad faces away from the left side
                quads.append(Quad3D(
                    top_left=self._corner(f, i + 1, slice_idx, True),
                    top_right=self._corner(f, i, slice_idx, True),
                    bottom_left=self._corner(f, i + 1, slice_idx + 1, True),
                    bottom_right=self._corner(f, i, slice_idx + 1, True),
                    normal=normal.copy(),
                ))

        return quads

    # End strips at the polyline's first and last points

    def _end_normal(self, point_idx: int, sign: float) -> np.ndarray:
        edge_dir = normalize_or_zero(
            self._back_slices[0, point_idx] - self._front_slices[0, point_idx]
        )
        return sign * normalize_or_zero(np.cross(self._extrusion_dir, edge_dir))

    def top_face(self) -> List[Quad3D]:
        """Strip closing the start of the polyline."""
        return self.top_face_f(_position_only)

    def top_face_f(self, f: VertexMapper) -> List[Quad3D]:
        point_idx = 0
        normal = self._end_normal(point_idx, -1.0)
        quads = []

        for slice_idx in range(self._subdivisions):
            quads.append(Quad3D(
                top_left=self._corner(f, point_idx, slice_idx, False),
                top_right=self._corner(f, point_idx, slice_idx, True),
                bottom_left=self._corner(f, point_idx, slice_idx + 1, False),
                bottom_right=self._corner(f, point_idx, slice_idx + 1, True),
                normal=normal.copy(),
            ))

        return quads

    def bottom_face(self) -> List[Quad3D]:
        """Strip closing the end of the polyline."""
        return self.bottom_face_f(_position_only)

    def bottom_face_f(self, f: VertexMapper) -> List[Quad3D]:
        point_idx = len(self._points) - 1
        normal = self._end_normal(point_idx, 1.0)
        quads = []

        for slice_idx in range(self._subdivisions):
            quads.append(Quad3D(
                top_left=self._corner(f, point_idx, slice_idx, True),
                top_right=self._corner(f, point_idx, slice_idx, False),
                bottom_left=self._corner(f, point_idx, slice_idx + 1, True),
                bottom_right=self._corner(f, point_idx, slice_idx + 1, False),
                normal=normal.copy(),
            ))

        return quads

    # Face selection

    def faces_f(
        self,
        f: VertexMapper,
        names: Optional[Sequence[str]] = None,
    ) -> Dict[str, List[Quad3D]]:
        """Quads for each requested face, keyed by face name.

        Raises:
            ValueError: if a name is not one of FACE_NAMES.
        """
        if names is None:
            names = self.FACE_NAMES
        unknown = [n for n in names if n not in self.FACE_NAMES]
        if unknown:
            raise ValueError(
                f"Unknown face name(s) {unknown}; expected any of {list(self.FACE_NAMES)}"
            )
        return {name: getattr(self, f"{name}_face_f")(f) for name in names}

    def faces(self, names: Optional[Sequence[str]] = None) -> Dict[str, List[Quad3D]]:
        return self.faces_f(_position_only, names)

    def __repr__(self) -> str:
        return (
            f"PlateGeometry(points={len(self._points)}, "
            f"extrusion={self._extrusion.tolist()}, width={self._width}, "
            f"subdivisions={self._subdivisions})"
        )
