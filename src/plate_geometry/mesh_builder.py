"""
Pack plate quads into a triangle mesh.

Each quad is split into two triangles ordered counter-clockwise about its
stated normal, vertices shared between faces are welded, and a closed plate
gets its winding made consistent and outward by trimesh.
"""
import logging
from typing import Callable, Iterable, List, NamedTuple, Optional, Sequence

import numpy as np
import trimesh

from plate_geometry.plate import PlateGeometry
from plate_geometry.quad import Quad3D, position_of

logger = logging.getLogger(__name__)

UVMapper = Callable[[np.ndarray], Sequence[float]]


class PlateVertex(NamedTuple):
    """Corner payload carrying both the position and its canonical UVW."""
    position: np.ndarray
    uvw: np.ndarray


def _triangulate(quads: Iterable[Quad3D]) -> List[tuple]:
    triangles = []
    for quad in quads:
        triangles.extend(quad.triangles())
    return triangles


def quads_to_trimesh(
    quads: Iterable[Quad3D],
    merge_vertices: bool = True,
) -> trimesh.Trimesh:
    """Build a mesh from quads of any payload type.

    Args:
        quads: Quads whose corners resolve to positions via position_of.
        merge_vertices: Weld coincident vertices.
    """
    triangles = _triangulate(quads)
    vertices = np.array(
        [position_of(c) for tri in triangles for c in tri], dtype=float,
    ).reshape(-1, 3)
    faces = np.arange(len(vertices), dtype=np.int64).reshape(-1, 3)
    mesh = trimesh.Trimesh(vertices=vertices, faces=faces, process=False)
    if merge_vertices and len(faces):
        mesh.merge_vertices()
    return mesh


def plate_to_trimesh(
    plate: PlateGeometry,
    faces: Optional[Sequence[str]] = None,
    merge_vertices: bool = True,
    fix_normals: bool = True,
    uv_mapper: Optional[UVMapper] = None,
) -> trimesh.Trimesh:
    """Assemble the selected faces of a plate into one mesh.

    Args:
        plate: Source geometry.
        faces: Face names from PlateGeometry.FACE_NAMES (default: all six).
        merge_vertices: Weld vertices shared between quads. With a
            uv_mapper, only vertices with equal UVs are welded.
        fix_normals: Make winding consistent and outward when the
            result is watertight.
        uv_mapper: Optional function mapping a corner's uvw to a (u, v)
            texture coordinate, stored as trimesh TextureVisuals.

    Raises:
        ValueError: if a face name is unknown.
    """
    by_face = plate.faces_f(PlateVertex, faces)
    triangles = _triangulate(q for quads in by_face.values() for q in quads)

    vertices = np.array([c.position for tri in triangles for c in tri]).reshape(-1, 3)
    tri_faces = np.arange(len(vertices), dtype=np.int64).reshape(-1, 3)
    mesh = trimesh.Trimesh(vertices=vertices, faces=tri_faces, process=False)

    if uv_mapper is not None:
        uv = np.array(
            [uv_mapper(c.uvw) for tri in triangles for c in tri], dtype=float,
        ).reshape(-1, 2)
        mesh.visual = trimesh.visual.TextureVisuals(uv=uv)

    if merge_vertices:
        mesh.merge_vertices()
    if fix_normals and mesh.is_watertight:
        mesh.fix_normals()

    logger.info(
        "Plate mesh: %d vertices, %d faces from %s",
        len(mesh.vertices), len(mesh.faces), ", ".join(by_face),
    )
    return mesh
