from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
SCRIPT = REPO_ROOT / "scripts" / "generate_plate.py"


def _run(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, str(SCRIPT), *args], capture_output=True, text=True,
    )


def test_cli_from_flags_writes_mesh_and_summary(tmp_path: Path):
    mesh_path = tmp_path / "plate.obj"
    summary_path = tmp_path / "summary.json"
    proc = _run(
        "--points", "0,0,0;1,0,0;2,0,1",
        "--extrusion", "0,2,0",
        "--width", "0.4",
        "--subdivisions", "2",
        "--output", str(mesh_path),
        "--summary", str(summary_path),
    )
    assert proc.returncode == 0, proc.stderr
    assert "Wrote" in proc.stdout
    assert mesh_path.exists()

    summary = json.loads(summary_path.read_text(encoding="utf-8"))
    assert summary["quad_counts"]["left"] == 4
    assert summary["mesh"]["watertight"] is True


def test_cli_from_config_with_face_subset(plate_config_file: str, tmp_path: Path):
    mesh_path = tmp_path / "caps.stl"
    summary_path = tmp_path / "summary.json"
    proc = _run(
        "--config", plate_config_file,
        "--faces", "front,back",
        "--output", str(mesh_path),
        "--summary", str(summary_path),
    )
    assert proc.returncode == 0, proc.stderr
    summary = json.loads(summary_path.read_text(encoding="utf-8"))
    assert summary["mesh"]["face_count"] == 8
    assert summary["mesh"]["watertight"] is False


def test_cli_rejects_zero_width(tmp_path: Path):
    proc = _run(
        "--points", "0,0,0;1,0,0",
        "--extrusion", "0,1,0",
        "--width", "0",
        "--output", str(tmp_path / "plate.stl"),
    )
    assert proc.returncode == 1
    assert "width must be positive" in proc.stderr
    assert not (tmp_path / "plate.stl").exists()


def test_cli_strict_subdivisions(tmp_path: Path):
    proc = _run(
        "--points", "0,0,0;1,0,0",
        "--extrusion", "0,1,0",
        "--width", "0.5",
        "--subdivisions", "0",
        "--strict",
        "--output", str(tmp_path / "plate.stl"),
    )
    assert proc.returncode == 1
    assert "subdivision" in proc.stderr


def test_cli_requires_inputs(tmp_path: Path):
    proc = _run("--output", str(tmp_path / "plate.stl"))
    assert proc.returncode == 2
    assert "missing" in proc.stderr
