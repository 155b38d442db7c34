import math

import pytest

from violation_map.config import CENTROIDS, REGION_COLORS, load_centroids, validate_centroids
from violation_map.errors import InvalidConfiguration
from violation_map.loader import load_violations
from violation_map.models import Centroid, Quadrant


def test_default_configuration_is_valid():
    validate_centroids(CENTROIDS)
    assert len(CENTROIDS) == 10
    assert REGION_COLORS[Quadrant.NORTH_WEST] == "#ff6b6b"
    assert REGION_COLORS[Quadrant.NORTH_EAST] == "#4ecdc4"
    assert REGION_COLORS[Quadrant.SOUTH_WEST] == "#45aaf2"
    assert REGION_COLORS[Quadrant.SOUTH_EAST] == "#fed330"


@pytest.mark.parametrize(
    "centroids",
    [
        [],
        [Centroid("A", 0.0, 0.0), Centroid("A", 1.0, 1.0)],
        [Centroid("A", float("nan"), 0.0)],
    ],
)
def test_validate_centroids_rejects(centroids):
    with pytest.raises(InvalidConfiguration):
        validate_centroids(centroids)


def test_load_centroids(tmp_path):
    path = tmp_path / "centroids.csv"
    path.write_text("name,longitude,latitude\nMargao,73.9586,15.2832\nPanaji,73.8278,15.4909\n")
    centroids = load_centroids(path)
    assert centroids == [
        Centroid("Margao", 73.9586, 15.2832),
        Centroid("Panaji", 73.8278, 15.4909),
    ]


def test_load_centroids_missing_column(tmp_path):
    path = tmp_path / "centroids.csv"
    path.write_text("name,longitude\nMargao,73.9586\n")
    with pytest.raises(InvalidConfiguration):
        load_centroids(path)


def test_load_centroids_bad_coordinate(tmp_path):
    path = tmp_path / "centroids.csv"
    path.write_text("name,longitude,latitude\nMargao,abc,15.2832\n")
    with pytest.raises(InvalidConfiguration):
        load_centroids(path)


def test_load_violations_coerces_coordinates(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text(
        "vehicleNumber,violations,longitude,latitude\n"
        "GA-01-1234,Speeding,73.8113,15.3927\n"
        "GA-02-5678,No helmet, 73.9668 ,oops\n"
    )
    points = load_violations(path)

    assert len(points) == 2
    assert points[0].index == 0
    assert points[0].longitude == pytest.approx(73.8113)
    assert points[0].latitude == pytest.approx(15.3927)
    assert points[0].attributes == {"vehicleNumber": "GA-01-1234", "violations": "Speeding"}

    assert points[1].longitude == pytest.approx(73.9668)
    assert math.isnan(points[1].latitude)


def test_load_violations_empty_coordinate_is_nan(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text("longitude,latitude\n,15.0\n")
    (point,) = load_violations(path)
    assert math.isnan(point.longitude)
    assert point.attributes == {}


def test_load_violations_requires_coordinates(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text("vehicleNumber,lat\nGA-01,15.0\n")
    with pytest.raises(ValueError):
        load_violations(path)


def test_load_centroids_blank_name(tmp_path):
    path = tmp_path / "centroids.csv"
    path.write_text("name,longitude,latitude\n,73.9586,15.2832\n")
    with pytest.raises(InvalidConfiguration):
        load_centroids(path)


def test_validate_centroids_rejects_whitespace_name():
    with pytest.raises(InvalidConfiguration):
        validate_centroids([Centroid("  ", 73.9, 15.3)])


def test_load_violations_rejects_trailing_junk(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text("longitude,latitude\n73.9,15.40abc\n")
    (point,) = load_violations(path)
    assert math.isnan(point.latitude)
