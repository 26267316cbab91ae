import logging
from pathlib import Path
from typing import List, Tuple

from shapely import wkt
from shapely.errors import ShapelyError

from trajio.core.errors import MalformedFieldError
from trajio.core.trajectory import TemporalTrajectory, Trajectory
from trajio.io.reader import TrajectoryReader
from trajio.io.schema import (
    check_delimiter,
    parse_field,
    parse_timestamps,
    resolve_schema,
    tokenize,
)
from trajio.io.text_source import LineSource

logger = logging.getLogger(__name__)


def parse_linestring(value: str) -> List[Tuple[float, float]]:
    """
    Parses a WKT LINESTRING into its (x, y) vertices.
    A POINT is read as a single-point trajectory.
    """
    try:
        geom = wkt.loads(value)
    except ShapelyError as e:
        raise ValueError(f"invalid WKT: {e}") from e
    if geom.geom_type not in ("LineString", "Point"):
        raise ValueError(f"expected LineString, got {geom.geom_type}")
    if geom.is_empty:
        raise ValueError(f"empty {geom.geom_type}")
    return [(c[0], c[1]) for c in geom.coords]


class CSVTrajectoryReader(TrajectoryReader):
    """
    Reads a delimited file where each row is one whole trajectory:
    an integer id and a WKT LINESTRING, plus an optional column holding
    the comma separated timestamps of the points.
    """

    def __init__(
        self,
        filepath: str | Path,
        id_name: str = "id",
        geom_name: str = "geom",
        time_name: str = "",
        delimiter: str = ",",
    ):
        """
        Args:
            filepath: Path to the delimited file. Its first line is the header.
            id_name: Column holding the trajectory id.
            geom_name: Column holding the WKT geometry.
            time_name: Column holding the timestamps. Empty or missing means no time channel.
            delimiter: Single character separating fields.
        """
        self.delimiter = check_delimiter(delimiter)
        self._source = LineSource(filepath)
        try:
            self.schema = resolve_schema(
                self._source.header,
                required={"id": id_name, "geom": geom_name},
                optional={"time": time_name},
                delimiter=self.delimiter,
            )
        except Exception:
            self._source.close()
            raise

        if time_name and not self.has_time_stamp():
            logger.warning("Time stamp column %s not found, will be estimated", time_name)
        logger.info(
            "Read trajectories from %s: id index %s geometry index %s time index %s",
            self._source.filepath,
            self.schema.index("id"),
            self.schema.index("geom"),
            self.schema.index("time"),
        )

    def has_time_stamp(self) -> bool:
        return self.schema.has("time")

    def _has_next(self) -> bool:
        return self._source.has_next()

    def _read_next(self, temporal: bool) -> Trajectory:
        line_number, line = self._source.next_line()
        fields = tokenize(line, self.delimiter)
        traj_id = parse_field(fields, self.schema, "id", line_number, int)
        points = parse_field(fields, self.schema, "geom", line_number, parse_linestring)
        if not temporal:
            return Trajectory(id=traj_id, points=points)

        timestamps = []
        if self.has_time_stamp():
            timestamps = parse_field(fields, self.schema, "time", line_number, parse_timestamps)
            if timestamps and len(timestamps) != len(points):
                raise MalformedFieldError(
                    line_number,
                    self.schema.column_name("time"),
                    fields[self.schema.index("time")],
                    f"{len(timestamps)} timestamps for {len(points)} points",
                )
        return TemporalTrajectory(id=traj_id, points=points, timestamps=timestamps)

    def _reset(self) -> None:
        self._source.rewind()

    def _close(self) -> None:
        self._source.close()
