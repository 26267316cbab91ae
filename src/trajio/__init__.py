from trajio.config import GPSConfig
from trajio.core import (
    ConfigurationError,
    ExhaustedSourceError,
    MalformedFieldError,
    ReaderClosedError,
    TemporalTrajectory,
    Trajectory,
    TrajectoryReaderError,
)
from trajio.io import (
    CSVPointReader,
    CSVTrajectoryReader,
    CSVTrajectoryWriter,
    TrajectoryReader,
    VectorTrajectoryReader,
    open_reader,
)
