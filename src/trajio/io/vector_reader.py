import logging
from pathlib import Path
from typing import Optional

import geopandas as gpd

from trajio.core.errors import ConfigurationError, MalformedFieldError
from trajio.core.trajectory import TemporalTrajectory, Trajectory
from trajio.io.reader import TrajectoryReader

logger = logging.getLogger(__name__)


class VectorTrajectoryReader(TrajectoryReader):
    """
    Reads trajectories from a vector dataset (shapefile, GeoPackage, GeoJSON...)
    whose features are LineStrings carrying an integer id attribute.
    The features of the layer are loaded at construction and handed out in order.
    """

    def __init__(self, filepath: str | Path, id_name: str = "id", layer: Optional[str] = None):
        self.filepath = Path(filepath)
        self.id_name = id_name
        logger.info("Read trajectory from file %s with id column %s", self.filepath, id_name)

        try:
            kwargs = {"layer": layer} if layer is not None else {}
            self._frame = gpd.read_file(self.filepath, **kwargs)
        except Exception as e:
            raise ConfigurationError(f"Open data source {self.filepath} failed: {e}") from e

        if id_name not in self._frame.columns:
            raise ConfigurationError(f"Id column {id_name} not found")

        kinds = sorted(set(self._frame.geom_type.dropna()))
        if any(kind != "LineString" for kind in kinds):
            raise ConfigurationError(
                f"Geometry type is {', '.join(kinds)}, which should be LineString"
            )
        logger.info("Geometry type is LineString")

        self._cursor = 0
        self._count = len(self._frame)
        logger.info("Total number of trajectories %d", self._count)

    @property
    def num_trajectories(self) -> int:
        return self._count

    def _has_next(self) -> bool:
        return self._cursor < self.num_trajectories

    def _read_next(self, temporal: bool) -> Trajectory:
        row = self._frame.iloc[self._cursor]
        self._cursor += 1
        raw_id = row[self.id_name]
        try:
            traj_id = int(raw_id)
        except (TypeError, ValueError) as e:
            raise MalformedFieldError(self._cursor, self.id_name, str(raw_id), str(e)) from e

        geom = row.geometry
        if geom is None or geom.is_empty:
            raise MalformedFieldError(self._cursor, "geometry", str(geom), "empty geometry")
        points = [(c[0], c[1]) for c in geom.coords]
        if temporal:
            return TemporalTrajectory(id=traj_id, points=points)
        return Trajectory(id=traj_id, points=points)

    def _reset(self) -> None:
        self._cursor = 0

    def _close(self) -> None:
        self._frame = None
