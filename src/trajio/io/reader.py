import abc
from typing import Iterator, List

from trajio.core.errors import ExhaustedSourceError, ReaderClosedError
from trajio.core.trajectory import TemporalTrajectory, Trajectory


class TrajectoryReader(abc.ABC):
    """
    Common reading interface of every trajectory source.

    Readers are pull-based: check has_next(), then read one trajectory at a
    time. A reader owns its underlying file or dataset until close().
    """

    _closed: bool = False

    @abc.abstractmethod
    def _has_next(self) -> bool:
        """True if the source has anything left to read."""

    @abc.abstractmethod
    def _read_next(self, temporal: bool) -> Trajectory:
        """
        Reads one trajectory; only called when _has_next() is true.
        Returns a TemporalTrajectory when temporal is set.
        """

    @abc.abstractmethod
    def _reset(self) -> None:
        pass

    @abc.abstractmethod
    def _close(self) -> None:
        pass

    def has_time_stamp(self) -> bool:
        return False

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self):
        if self._closed:
            raise ReaderClosedError(f"{type(self).__name__} is closed")

    def has_next(self) -> bool:
        self._check_open()
        return self._has_next()

    def _check_has_next(self):
        if not self.has_next():
            raise ExhaustedSourceError(f"{type(self).__name__} has no trajectory left")

    def read_next_trajectory(self) -> Trajectory:
        self._check_has_next()
        return self._read_next(temporal=False)

    def read_next_temporal_trajectory(self) -> TemporalTrajectory:
        """Timestamps are empty when the source has no time channel."""
        self._check_has_next()
        return self._read_next(temporal=True)

    def read_next_n(self, n: int) -> List[Trajectory]:
        """
        Reads up to n trajectories. Returns fewer if the source runs out.
        """
        trajectories = []
        while len(trajectories) < n and self.has_next():
            trajectories.append(self.read_next_trajectory())
        return trajectories

    def read_all(self) -> List[Trajectory]:
        trajectories = []
        while self.has_next():
            trajectories.append(self.read_next_trajectory())
        return trajectories

    def reset(self) -> None:
        """Rewinds to the first record so the source can be read again."""
        self._check_open()
        self._reset()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._close()

    def __iter__(self) -> Iterator[Trajectory]:
        while self.has_next():
            yield self.read_next_trajectory()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
