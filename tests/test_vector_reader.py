import geopandas as gpd
import pytest
from shapely.geometry import LineString, Point as ShapelyPoint

from trajio.core.errors import ConfigurationError, MalformedFieldError
from trajio.core.trajectory import Trajectory
from trajio.io.vector_reader import VectorTrajectoryReader


def write_layer(path, ids, geometries, id_name="id"):
    gdf = gpd.GeoDataFrame({id_name: ids, "geometry": geometries}, crs="EPSG:4326")
    gdf.to_file(path, driver="ESRI Shapefile")
    return path


@pytest.fixture
def trips_shp(tmp_path):
    return write_layer(
        tmp_path / "trips.shp",
        [1, 2],
        [LineString([(0, 0), (1, 1)]), LineString([(5, 5), (6, 6), (7, 7)])],
    )


def test_reads_features_in_order(trips_shp):
    reader = VectorTrajectoryReader(trips_shp)
    assert reader.num_trajectories == 2
    assert not reader.has_time_stamp()

    first = reader.read_next_trajectory()
    assert first == Trajectory(id=1, points=[(0.0, 0.0), (1.0, 1.0)])
    second = reader.read_next_temporal_trajectory()
    assert second.id == 2
    assert len(second.points) == 3
    assert second.timestamps == []
    assert not reader.has_next()


def test_reset_and_batches(trips_shp):
    reader = VectorTrajectoryReader(trips_shp)
    assert [t.id for t in reader.read_next_n(1)] == [1]
    reader.reset()
    assert [t.id for t in reader.read_all()] == [1, 2]
    reader.close()
    reader.close()


def test_missing_id_column(tmp_path):
    path = write_layer(tmp_path / "trips.shp", [1], [LineString([(0, 0), (1, 1)])], id_name="tid")
    with pytest.raises(ConfigurationError, match="Id column id not found"):
        VectorTrajectoryReader(path)


def test_wrong_geometry_kind(tmp_path):
    path = write_layer(tmp_path / "points.shp", [1, 2], [ShapelyPoint(0, 0), ShapelyPoint(1, 1)])
    with pytest.raises(ConfigurationError, match="Geometry type is Point"):
        VectorTrajectoryReader(path)


def test_unopenable_source(tmp_path):
    with pytest.raises(ConfigurationError, match="Open data source"):
        VectorTrajectoryReader(tmp_path / "missing.shp")


def test_non_integer_id_fails_that_read(tmp_path):
    path = write_layer(
        tmp_path / "trips.shp",
        ["a", "2"],
        [LineString([(0, 0), (1, 1)]), LineString([(2, 2), (3, 3)])],
    )
    reader = VectorTrajectoryReader(path)

    with pytest.raises(MalformedFieldError) as excinfo:
        reader.read_next_trajectory()
    assert excinfo.value.line_number == 1
    assert excinfo.value.column == "id"
    assert reader.read_next_trajectory().id == 2


def test_null_geometry_fails_that_read(tmp_path):
    path = write_layer(
        tmp_path / "trips.shp",
        [1, 2],
        [None, LineString([(2, 2), (3, 3)])],
    )
    reader = VectorTrajectoryReader(path)

    with pytest.raises(MalformedFieldError, match="empty geometry"):
        reader.read_next_trajectory()
    assert reader.read_next_trajectory() == Trajectory(id=2, points=[(2.0, 2.0), (3.0, 3.0)])
    reader.close()
