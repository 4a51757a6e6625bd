#!/usr/bin/env python3
"""
Sweep a polyline into a plate mesh and write it to disk.

Usage:
    python scripts/generate_plate.py --config plate.json --output plate.stl
    python scripts/generate_plate.py --points "0,0,0;1,0,0;2,0,1" --extrusion 0,2,0 \
        --width 0.4 --subdivisions 2 --output plate.obj --summary plate.json
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from plate_geometry import PlateConfig, PlateGeometry, PlateGeometryError, plate_to_trimesh
from plate_geometry.export import SUPPORTED_MESH_TYPES, export_mesh, plate_summary, write_json


def _parse_vec3(text: str) -> tuple:
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(f"expected x,y,z but got '{text}'")
    try:
        return tuple(float(p) for p in parts)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _parse_points(text: str) -> list:
    return [_parse_vec3(chunk) for chunk in text.split(";") if chunk.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a plate mesh from a polyline, extrusion and width",
    )
    parser.add_argument("--config", default=None, help="Plate config JSON file")
    parser.add_argument(
        "--points", type=_parse_points, default=None,
        help='Polyline as "x,y,z;x,y,z;..." (overrides config)',
    )
    parser.add_argument(
        "--extrusion", type=_parse_vec3, default=None,
        help='Extrusion vector as "x,y,z" (overrides config)',
    )
    parser.add_argument("--width", type=float, default=None, help="Plate thickness")
    parser.add_argument(
        "--subdivisions", type=int, default=None,
        help="Segments along the extrusion (default: 1)",
    )
    parser.add_argument(
        "--faces", default=None,
        help=f"Comma-separated subset of {','.join(PlateGeometry.FACE_NAMES)}",
    )
    parser.add_argument(
        "--strict", action="store_true",
        help="Reject subdivisions < 1 instead of clamping",
    )
    parser.add_argument(
        "--output", default="plate.stl",
        help="Mesh output path (.stl/.obj/.ply/.glb, default: plate.stl)",
    )
    parser.add_argument("--summary", default=None, help="Optional summary JSON path")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logs"
    )
    return parser


def _resolve_config(args: argparse.Namespace, parser: argparse.ArgumentParser) -> PlateConfig:
    payload = PlateConfig.from_json(args.config).to_dict() if args.config else {}

    if args.points is not None:
        payload["points"] = args.points
    if args.extrusion is not None:
        payload["extrusion"] = args.extrusion
    if args.width is not None:
        payload["width"] = args.width
    if args.subdivisions is not None:
        payload["subdivisions"] = args.subdivisions
    if args.faces:
        payload["faces"] = [f.strip() for f in args.faces.split(",") if f.strip()]
    if args.strict:
        payload["strict_subdivisions"] = True

    missing = [k for k in ("points", "extrusion", "width") if k not in payload]
    if missing:
        parser.error(f"missing {', '.join(missing)} (pass --config or the flags)")
    return PlateConfig.from_dict(payload)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.config and not Path(args.config).is_file():
        parser.error(f"Config file not found: {args.config}")
    if Path(args.output).suffix.lower().lstrip(".") not in SUPPORTED_MESH_TYPES:
        parser.error(f"Unsupported output type: {args.output}")

    try:
        config = _resolve_config(args, parser)
        plate = config.build()
    except PlateGeometryError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    mesh = plate_to_trimesh(
        plate, faces=config.faces, merge_vertices=config.merge_vertices,
    )
    output_path = export_mesh(mesh, args.output)

    summary = plate_summary(plate, mesh)
    if args.summary:
        write_json(Path(args.summary), summary)

    print(f"Plate: {len(plate.points)} points, {plate.subdivisions} subdivisions")
    print(f"Mesh: {len(mesh.vertices)} vertices, {len(mesh.faces)} faces")
    print(f"Wrote {output_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
