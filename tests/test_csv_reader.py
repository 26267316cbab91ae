import pytest

from trajio.core.errors import ConfigurationError, MalformedFieldError
from trajio.core.trajectory import Trajectory
from trajio.io.csv_reader import CSVTrajectoryReader


@pytest.fixture
def trips_csv(tmp_path):
    p = tmp_path / "trips.csv"
    p.write_text(
        "id;geom;timestamp\n"
        "1;LINESTRING(0 0,1 1,2 2);0,1,2\n"
        "2;LINESTRING(5 5,6 6);10,20\n"
    )
    return p


def test_one_trajectory_per_row(trips_csv):
    reader = CSVTrajectoryReader(trips_csv, delimiter=";")
    assert reader.has_next()

    first = reader.read_next_trajectory()
    assert first == Trajectory(id=1, points=[(0.0, 0.0), (1.0, 1.0), (2.0, 2.0)])
    assert reader.read_next_trajectory().id == 2
    assert not reader.has_next()
    reader.close()


def test_temporal_rows(trips_csv):
    reader = CSVTrajectoryReader(trips_csv, time_name="timestamp", delimiter=";")
    assert reader.has_time_stamp()

    first = reader.read_next_temporal_trajectory()
    second = reader.read_next_temporal_trajectory()
    assert first.timestamps == [0.0, 1.0, 2.0]
    assert second.timestamps == [10.0, 20.0]


def test_time_column_not_configured(trips_csv):
    reader = CSVTrajectoryReader(trips_csv, delimiter=";")
    assert not reader.has_time_stamp()
    assert reader.read_next_temporal_trajectory().timestamps == []


def test_reset(trips_csv):
    reader = CSVTrajectoryReader(trips_csv, delimiter=";")
    first_pass = reader.read_all()
    reader.reset()
    assert reader.read_all() == first_pass
    assert len(first_pass) == 2


def test_missing_geometry_column(tmp_path):
    p = tmp_path / "bad.csv"
    p.write_text("id;wkt\n1;LINESTRING(0 0,1 1)\n")
    with pytest.raises(ConfigurationError, match="'geom' not found"):
        CSVTrajectoryReader(p, delimiter=";")


def test_empty_file(tmp_path):
    p = tmp_path / "empty.csv"
    p.write_text("")
    with pytest.raises(ConfigurationError, match="no header"):
        CSVTrajectoryReader(p)


def test_malformed_rows(tmp_path):
    p = tmp_path / "trips.csv"
    p.write_text(
        "id;geom;timestamp\n"
        "a;LINESTRING(0 0,1 1);0,1\n"
        "2;POLYGON((0 0,1 0,1 1,0 0));0\n"
        "3;LINESTRING(0 0,1 1);0\n"
        "4;LINESTRING(0 0,1 1);5,6\n"
    )
    reader = CSVTrajectoryReader(p, time_name="timestamp", delimiter=";")

    with pytest.raises(MalformedFieldError, match="column 'id'"):
        reader.read_next_temporal_trajectory()
    with pytest.raises(MalformedFieldError, match="expected LineString"):
        reader.read_next_temporal_trajectory()
    with pytest.raises(MalformedFieldError, match="1 timestamps for 2 points") as excinfo:
        reader.read_next_temporal_trajectory()
    assert excinfo.value.line_number == 4

    assert reader.read_next_temporal_trajectory().timestamps == [5.0, 6.0]
    reader.close()


def test_invalid_wkt(tmp_path):
    p = tmp_path / "trips.csv"
    p.write_text("id;geom\n1;LINESTRING(0 0,\n")
    reader = CSVTrajectoryReader(p, delimiter=";")
    with pytest.raises(MalformedFieldError, match="invalid WKT"):
        reader.read_next_trajectory()


def test_point_geometry_is_single_point_trajectory(tmp_path):
    p = tmp_path / "trips.csv"
    p.write_text("id;geom;timestamp\n7;POINT(3.5 -2.0);4\n")
    reader = CSVTrajectoryReader(p, time_name="timestamp", delimiter=";")
    traj = reader.read_next_temporal_trajectory()
    assert traj.points == [(3.5, -2.0)]
    assert traj.timestamps == [4.0]


def test_invalid_utf8_line(tmp_path):
    p = tmp_path / "trips.csv"
    p.write_bytes(b"id;geom\n1;LINESTRING(0 \xff0,1 1)\n2;LINESTRING(0 0,1 1)\n")
    reader = CSVTrajectoryReader(p, delimiter=";")

    assert reader.has_next()
    with pytest.raises(MalformedFieldError) as excinfo:
        reader.read_next_trajectory()
    assert excinfo.value.line_number == 2
    assert reader.read_next_trajectory().id == 2


def test_invalid_utf8_header(tmp_path):
    p = tmp_path / "trips.csv"
    p.write_bytes(b"id;g\xffeom\n1;LINESTRING(0 0,1 1)\n")
    with pytest.raises(ConfigurationError, match="not valid utf-8"):
        CSVTrajectoryReader(p, delimiter=";")
