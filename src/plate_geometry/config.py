"""Serializable configuration for building a plate."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Tuple

from plate_geometry.plate import PlateGeometry, PlateGeometryError

Vec3 = Tuple[float, float, float]


def _vec3(value: Any, name: str) -> Vec3:
    try:
        x, y, z = (float(c) for c in value)
    except (TypeError, ValueError) as exc:
        raise PlateGeometryError(f"{name} must be three numbers, got {value!r}") from exc
    return (x, y, z)


@dataclass(frozen=True)
class PlateConfig:
    """Inputs and build options for a PlateGeometry."""

    points: Tuple[Vec3, ...]
    extrusion: Vec3
    width: float
    subdivisions: int = 1
    strict_subdivisions: bool = False  # reject subdivisions < 1 instead of clamping
    faces: Tuple[str, ...] = PlateGeometry.FACE_NAMES
    merge_vertices: bool = True

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "PlateConfig":
        missing = [k for k in ("points", "extrusion", "width") if k not in payload]
        if missing:
            raise PlateGeometryError(f"Plate config is missing keys: {missing}")

        points = payload["points"]
        if not isinstance(points, (list, tuple)):
            raise PlateGeometryError("Plate config 'points' must be a list")

        try:
            width = float(payload["width"])
            subdivisions = int(payload.get("subdivisions", 1))
        except (TypeError, ValueError) as exc:
            raise PlateGeometryError(f"Invalid plate config value: {exc}") from exc

        faces = tuple(payload.get("faces", PlateGeometry.FACE_NAMES))
        unknown = [n for n in faces if n not in PlateGeometry.FACE_NAMES]
        if unknown:
            raise PlateGeometryError(f"Unknown face name(s) in plate config: {unknown}")

        return cls(
            points=tuple(_vec3(p, f"points[{i}]") for i, p in enumerate(points)),
            extrusion=_vec3(payload["extrusion"], "extrusion"),
            width=width,
            subdivisions=subdivisions,
            strict_subdivisions=bool(payload.get("strict_subdivisions", False)),
            faces=faces,
            merge_vertices=bool(payload.get("merge_vertices", True)),
        )

    @classmethod
    def from_json(cls, path: str | Path) -> "PlateConfig":
        """Load a config from a JSON file (FileNotFoundError if absent)."""
        with Path(path).open("r", encoding="utf-8") as f:
            try:
                payload = json.load(f)
            except json.JSONDecodeError as exc:
                raise PlateGeometryError(f"Invalid JSON in {path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise PlateGeometryError(f"Plate config in {path} must be a JSON object")
        return cls.from_dict(payload)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "points": [list(p) for p in self.points],
            "extrusion": list(self.extrusion),
            "width": self.width,
            "subdivisions": self.subdivisions,
            "strict_subdivisions": self.strict_subdivisions,
            "faces": list(self.faces),
            "merge_vertices": self.merge_vertices,
        }

    def build(self) -> PlateGeometry:
        return PlateGeometry(
            self.points,
            self.extrusion,
            self.width,
            self.subdivisions,
            strict=self.strict_subdivisions,
        )
