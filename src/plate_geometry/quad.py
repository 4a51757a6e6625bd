"""
Quad primitive emitted by the plate face methods.

A Quad3D holds four corner payloads and one flat face normal. The payloads
are whatever the caller's mapper returned: raw positions, or any object that
exposes its position (see position_of).
"""
from dataclasses import dataclass
from typing import Any, Generic, List, Tuple, TypeVar

import numpy as np

P = TypeVar("P")


def position_of(payload: Any) -> np.ndarray:
    """Resolve the 3D position carried by a corner payload.

    Accepts an array-like of length 3, or an object with a ``position``
    attribute/method or a ``pos`` attribute.
    """
    if isinstance(payload, np.ndarray):
        return payload
    position = getattr(payload, "position", None)
    if position is None:
        position = getattr(payload, "pos", None)
    if callable(position):
        position = position()
    if position is None:
        position = payload
    arr = np.asarray(position, dtype=float)
    if arr.shape != (3,):
        raise TypeError(f"Cannot resolve a 3D position from {type(payload).__name__}")
    return arr


@dataclass
class Quad3D(Generic[P]):
    """Four mapped corners plus the outward face normal."""
    top_left: P
    top_right: P
    bottom_left: P
    bottom_right: P
    normal: np.ndarray

    def corners(self) -> Tuple[P, P, P, P]:
        return (self.top_left, self.top_right, self.bottom_left, self.bottom_right)

    def positions(self) -> np.ndarray:
        """(4, 3) corner positions in corners() order."""
        return np.array([position_of(c) for c in self.corners()])

    def to_ccw_verts(self) -> List[P]:
        """Corners as a ring, counter-clockwise when viewed against the normal.

        The ring starts at top_left. A zero normal keeps the default
        top_left, bottom_left, bottom_right, top_right order.
        """
        ring = [self.top_left, self.bottom_left, self.bottom_right, self.top_right]
        pts = np.array([position_of(c) for c in ring])

        # Newell's method: area-weighted normal of the ring
        nxt = np.roll(pts, -1, axis=0)
        ring_normal = np.array([
            np.sum((pts[:, 1] - nxt[:, 1]) * (pts[:, 2] + nxt[:, 2])),
            np.sum((pts[:, 2] - nxt[:, 2]) * (pts[:, 0] + nxt[:, 0])),
            np.sum((pts[:, 0] - nxt[:, 0]) * (pts[:, 1] + nxt[:, 1])),
        ])

        if float(ring_normal @ np.asarray(self.normal, dtype=float)) < 0.0:
            ring = [self.top_left, self.top_right, self.bottom_right, self.bottom_left]
        return ring

    def triangles(self) -> List[Tuple[P, P, P]]:
        """Split into two counter-clockwise triangles sharing the first corner."""
        a, b, c, d = self.to_ccw_verts()
        return [(a, b, c), (a, c, d)]
