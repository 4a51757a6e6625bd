"""Mesh and summary artifacts for a built plate."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import trimesh

from plate_geometry.plate import PlateGeometry
from plate_geometry.section import cross_section_area, swept_volume

logger = logging.getLogger(__name__)

SUPPORTED_MESH_TYPES = ("stl", "obj", "ply", "glb")


def export_mesh(mesh: trimesh.Trimesh, path: str | Path) -> Path:
    """Write mesh to path; the file type comes from the suffix."""
    path = Path(path)
    file_type = path.suffix.lower().lstrip(".")
    if file_type not in SUPPORTED_MESH_TYPES:
        raise ValueError(
            f"Unsupported mesh type '{path.suffix}'; expected one of {SUPPORTED_MESH_TYPES}"
        )
    path.parent.mkdir(parents=True, exist_ok=True)
    mesh.export(str(path), file_type=file_type)
    logger.info("Wrote %s mesh to %s", file_type.upper(), path)
    return path


def plate_summary(
    plate: PlateGeometry,
    mesh: Optional[trimesh.Trimesh] = None,
) -> Dict[str, Any]:
    """Machine-readable description of a plate and, optionally, its mesh."""
    summary: Dict[str, Any] = {
        "point_count": len(plate.points),
        "extrusion": plate.extrusion.tolist(),
        "width": plate.width,
        "subdivisions": plate.subdivisions,
        "total_arc_length": plate.total_arc_length,
        "quad_counts": {name: len(quads) for name, quads in plate.faces().items()},
        "cross_section_area": cross_section_area(plate),
        "swept_volume": swept_volume(plate),
    }
    if mesh is not None:
        watertight = bool(mesh.is_watertight)
        summary["mesh"] = {
            "vertex_count": len(mesh.vertices),
            "face_count": len(mesh.faces),
            "watertight": watertight,
            "volume": float(mesh.volume) if watertight else None,
        }
    return summary


def write_json(path: Path, payload: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)
