from .errors import (
    ConfigurationError,
    ExhaustedSourceError,
    MalformedFieldError,
    ReaderClosedError,
    TrajectoryReaderError,
)
from .trajectory import TemporalTrajectory, Trajectory
