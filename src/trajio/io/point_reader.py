import logging
from pathlib import Path
from typing import List, Optional, Tuple

from trajio.core.errors import MalformedFieldError
from trajio.core.trajectory import TemporalTrajectory, Trajectory
from trajio.io.reader import TrajectoryReader
from trajio.io.schema import check_delimiter, parse_field, resolve_schema, tokenize
from trajio.io.text_source import LineSource

logger = logging.getLogger(__name__)

# (line_number, fields) of a tokenized record
Record = Tuple[int, List[str]]


class CSVPointReader(TrajectoryReader):
    """
    Reads a delimited file where each row is a single point (id, x, y and
    optionally a timestamp) and assembles consecutive rows sharing an id
    into one trajectory.

    Rows of one trajectory must form a contiguous run. The file is read
    strictly forward: to find where a trajectory ends the reader has to read
    the first row of the next one, which is kept in a one-record pending
    buffer and becomes the first point of the following read. A later run
    of an id that was already seen is returned as a separate trajectory.
    """

    def __init__(
        self,
        filepath: str | Path,
        id_name: str = "id",
        x_name: str = "x",
        y_name: str = "y",
        time_name: str = "",
        delimiter: str = ",",
    ):
        """
        Args:
            filepath: Path to the delimited file. Its first line is the header.
            id_name: Column holding the integer trajectory id.
            x_name: Column holding the x coordinate.
            y_name: Column holding the y coordinate.
            time_name: Column holding the point timestamp. Empty or missing means no time channel.
            delimiter: Single character separating fields.
        """
        self.delimiter = check_delimiter(delimiter)
        self._source = LineSource(filepath)
        try:
            self.schema = resolve_schema(
                self._source.header,
                required={"id": id_name, "x": x_name, "y": y_name},
                optional={"time": time_name},
                delimiter=self.delimiter,
            )
        except Exception:
            self._source.close()
            raise

        self._pending: Optional[Record | MalformedFieldError] = None

        if time_name and not self.has_time_stamp():
            logger.warning("Time stamp column %s not found, will be estimated", time_name)
        logger.info(
            "Read points from %s: id index %s x index %s y index %s time index %s",
            self._source.filepath,
            self.schema.index("id"),
            self.schema.index("x"),
            self.schema.index("y"),
            self.schema.index("time"),
        )

    def has_time_stamp(self) -> bool:
        return self.schema.has("time")

    @property
    def pending(self) -> Optional[Record | MalformedFieldError]:
        """
        The record read past the end of the last trajectory, if any.
        Holds the error instead when that line could not be decoded.
        """
        return self._pending

    def _has_next(self) -> bool:
        # Counts point records, so a pending record alone is enough.
        return self._pending is not None or self._source.has_next()

    def _take_record(self) -> Record:
        if self._pending is not None:
            record, self._pending = self._pending, None
            if isinstance(record, MalformedFieldError):
                raise record
            return record
        line_number, line = self._source.next_line()
        return line_number, tokenize(line, self.delimiter)

    def _parse_point(self, record: Record, with_time: bool) -> Tuple[float, float, Optional[float]]:
        line_number, fields = record
        x = parse_field(fields, self.schema, "x", line_number, float)
        y = parse_field(fields, self.schema, "y", line_number, float)
        t = parse_field(fields, self.schema, "time", line_number, float) if with_time else None
        return x, y, t

    def _read_next(self, temporal: bool) -> Trajectory:
        with_time = temporal and self.has_time_stamp()
        points: List[Tuple[float, float]] = []
        timestamps: List[float] = []
        prev_id: Optional[int] = None
        first_observation = True

        while self._has_next():
            # A bad record after the first point ends the trajectory and
            # fails on its own on the next read.
            try:
                record = self._take_record()
            except MalformedFieldError as e:
                if first_observation:
                    raise
                self._pending = e
                break
            line_number, fields = record
            try:
                traj_id = parse_field(fields, self.schema, "id", line_number, int)
            except MalformedFieldError:
                if first_observation:
                    raise
                self._pending = record
                break
            if not first_observation and traj_id != prev_id:
                # First point of the next trajectory, kept unparsed
                self._pending = record
                break

            x, y, t = self._parse_point(record, with_time)
            points.append((x, y))
            if with_time:
                timestamps.append(t)
            prev_id = traj_id
            first_observation = False

        logger.debug("Assembled trajectory %s with %d points", prev_id, len(points))
        if temporal:
            return TemporalTrajectory(id=prev_id, points=points, timestamps=timestamps)
        return Trajectory(id=prev_id, points=points)

    def _reset(self) -> None:
        self._pending = None
        self._source.rewind()

    def _close(self) -> None:
        self._pending = None
        self._source.close()
