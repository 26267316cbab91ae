from pathlib import Path
from typing import Iterable

from trajio.core.errors import ConfigurationError
from trajio.core.trajectory import TemporalTrajectory, Trajectory
from trajio.io.schema import check_delimiter


def format_linestring(trajectory: Trajectory) -> str:
    """WKT of the trajectory. A single-point trajectory is written as a POINT."""
    coords = ",".join(f"{x!r} {y!r}" for x, y in trajectory.points)
    if len(trajectory.points) == 1:
        return f"POINT({coords})"
    return f"LINESTRING({coords})"


class CSVTrajectoryWriter:
    """
    Writes trajectories one per row (id, WKT geometry and optionally the
    comma separated timestamps), the layout CSVTrajectoryReader reads.
    The delimiter defaults to ';' because geometry and timestamps contain commas.
    """

    def __init__(
        self,
        filepath: str | Path,
        delimiter: str = ";",
        write_timestamps: bool = False,
        id_name: str = "id",
        geom_name: str = "geom",
        time_name: str = "timestamp",
    ):
        self.filepath = Path(filepath)
        self.delimiter = check_delimiter(delimiter)
        if self.delimiter == ",":
            raise ConfigurationError("Delimiter cannot be ',': geometry and timestamps contain commas")
        self.write_timestamps = write_timestamps
        self.count = 0
        self._file = open(self.filepath, mode="w", newline="", encoding="utf-8")

        header = [id_name, geom_name]
        if write_timestamps:
            header.append(time_name)
        self._file.write(self.delimiter.join(header) + "\n")

    def write(self, trajectory: Trajectory):
        row = [str(trajectory.id), format_linestring(trajectory)]
        if self.write_timestamps:
            timestamps = trajectory.timestamps if isinstance(trajectory, TemporalTrajectory) else []
            row.append(",".join(repr(t) for t in timestamps))
        self._file.write(self.delimiter.join(row) + "\n")
        self.count += 1

    def write_all(self, trajectories: Iterable[Trajectory]) -> int:
        for trajectory in trajectories:
            self.write(trajectory)
        return self.count

    def close(self):
        if not self._file.closed:
            self._file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
