import math
from dataclasses import dataclass, field

from shapely.geometry import LineString


@dataclass(frozen=True, eq=True)
class Trajectory:
    """
    A trajectory read from a source: an integer id and the ordered
    (x, y) points that belong to it.
    frozen=True so a reader can hand out values it no longer touches.
    """
    id: int
    points: list[tuple[float, float]] = field(default_factory=list)

    # Holds lists, so not hashable
    __hash__ = None

    def __len__(self) -> int:
        return len(self.points)

    @property
    def is_empty(self) -> bool:
        return not self.points

    @property
    def linestring(self) -> LineString:
        if len(self.points) < 2:
            raise ValueError(f"Trajectory {self.id} has fewer than two points")
        return LineString(self.points)

    @property
    def length(self) -> float:
        """Planar length of the polyline, in the units of the coordinates."""
        return sum(
            math.hypot(x2 - x1, y2 - y1)
            for (x1, y1), (x2, y2) in zip(self.points, self.points[1:])
        )


@dataclass(frozen=True, eq=True)
class TemporalTrajectory(Trajectory):
    """
    Trajectory with one timestamp per point.
    timestamps is empty when the source has no time channel.
    """
    timestamps: list[float] = field(default_factory=list)

    __hash__ = None

    def __post_init__(self):
        if self.timestamps and len(self.timestamps) != len(self.points):
            raise ValueError(
                f"Trajectory {self.id} has {len(self.points)} points "
                f"but {len(self.timestamps)} timestamps"
            )

    @property
    def has_timestamps(self) -> bool:
        return bool(self.timestamps)

    @property
    def start_time(self) -> float:
        if not self.timestamps:
            raise ValueError("Trajectory has no timestamps")
        return self.timestamps[0]

    @property
    def end_time(self) -> float:
        if not self.timestamps:
            raise ValueError("Trajectory has no timestamps")
        return self.timestamps[-1]

    def to_trajectory(self) -> Trajectory:
        return Trajectory(id=self.id, points=list(self.points))
