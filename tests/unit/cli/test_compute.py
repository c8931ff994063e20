from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner

from planimeter.cli.entrypoint import cli

if TYPE_CHECKING:
    from pathlib import Path

NORTH_POLE_SQUARE = "89 0\n89 90\n89 180\n89 270\n"


def last_fields(output: str) -> list[str]:
    return output.strip().splitlines()[-1].split()


def test_compute_polygon_from_stdin() -> None:
    result = CliRunner().invoke(cli, ["compute"], input=NORTH_POLE_SQUARE)

    assert result.exit_code == 0, result.output
    num, perimeter, area = last_fields(result.output)
    assert int(num) == 4
    assert float(perimeter) == pytest.approx(631819.8745, abs=1e-3)
    assert float(area) == pytest.approx(24952305678.0, abs=1)


def test_compute_several_polygons_from_file(tmp_path: Path) -> None:
    points_file = tmp_path / "polygons.txt"
    points_file.write_text(NORTH_POLE_SQUARE + "\n" + "-89 0\n-89 90\n-89 180\n-89 270\n")

    result = CliRunner().invoke(cli, ["compute", "--input", str(points_file), "--precision", "0"])

    assert result.exit_code == 0, result.output
    lines = [line.split() for line in result.output.strip().splitlines()[-2:]]
    assert float(lines[0][2]) == pytest.approx(24952305678.0, abs=1)
    assert float(lines[1][2]) == pytest.approx(-24952305678.0, abs=1)


def test_compute_unsigned_and_reverse() -> None:
    clockwise = "-89 0\n-89 90\n-89 180\n-89 270\n"

    unsigned = CliRunner().invoke(cli, ["compute", "--unsigned"], input=clockwise)
    reverse = CliRunner().invoke(cli, ["compute", "--reverse"], input=clockwise)

    assert unsigned.exit_code == 0, unsigned.output
    assert reverse.exit_code == 0, reverse.output
    assert float(last_fields(unsigned.output)[2]) > 5e14
    assert float(last_fields(reverse.output)[2]) == pytest.approx(24952305678.0, abs=1)


def test_compute_polyline() -> None:
    result = CliRunner().invoke(cli, ["compute", "--polyline"], input="90 0\n0 0\n0 90\n")

    assert result.exit_code == 0, result.output
    fields = last_fields(result.output)
    assert len(fields) == 2
    assert float(fields[1]) == pytest.approx(20020719, abs=1)


def test_compute_edges() -> None:
    result = CliRunner().invoke(cli, ["compute", "--edges", "--polyline"], input="0 0\n90 1000\n0 500\n")

    assert result.exit_code == 0, result.output
    num, length = last_fields(result.output)
    assert int(num) == 3
    assert float(length) == pytest.approx(1500.0)


def test_compute_custom_sphere() -> None:
    result = CliRunner().invoke(
        cli,
        ["compute", "--polyline", "--major-radius", "6371000", "--flattening", "0", "--precision", "6"],
        input="0 0\n0 90\n",
    )

    assert result.exit_code == 0, result.output
    assert float(last_fields(result.output)[1]) == pytest.approx(6371000 * 3.141592653589793 / 2, rel=1e-12)


def test_compute_rejects_malformed_line() -> None:
    result = CliRunner().invoke(cli, ["compute"], input="89 0\nnorth pole\n")

    assert result.exit_code == 1
    assert "Expected latitude and longitude as two numbers" in result.output


def test_compute_requires_both_custom_ellipsoid_parameters() -> None:
    result = CliRunner().invoke(cli, ["compute", "--major-radius", "6371000"], input=NORTH_POLE_SQUARE)

    assert result.exit_code == 2


def test_compute_unknown_ellipsoid() -> None:
    result = CliRunner().invoke(cli, ["compute", "--ellipsoid", "not-an-ellipsoid"], input=NORTH_POLE_SQUARE)

    assert result.exit_code == 2
    assert "Unknown ellipsoid" in result.output


def test_aoi() -> None:
    geojson = {
        "type": "Polygon",
        "coordinates": [[[1, 1], [1, -0.6], [-1, -1], [-1, 1], [0.5, 2], [1, 1]]],
    }

    result = CliRunner().invoke(cli, ["aoi", "--aoi", json.dumps(geojson), "--reverse"])

    assert result.exit_code == 0, result.output
    num, _, area = last_fields(result.output)
    assert int(num) == 5
    assert float(area) == pytest.approx(56622213363.238686, rel=1e-9)


def test_aoi_rejects_points() -> None:
    result = CliRunner().invoke(cli, ["aoi", "--aoi", '{"type": "Point", "coordinates": [0.0, 0.0]}'])

    assert result.exit_code == 1
    assert "Provided GeoJSON is not a polygon or a line string" in result.output
