import logging

from trajio.config import GPSConfig
from trajio.core.errors import ConfigurationError
from trajio.io.csv_reader import CSVTrajectoryReader
from trajio.io.point_reader import CSVPointReader
from trajio.io.reader import TrajectoryReader
from trajio.io.vector_reader import VectorTrajectoryReader

logger = logging.getLogger(__name__)


def open_reader(config: GPSConfig) -> TrajectoryReader:
    """
    Opens the reader matching the layout described by config.

    Raises:
        ConfigurationError: If the file does not exist or its columns do not match.
    """
    if not config.path.exists():
        raise ConfigurationError(f"GPS file {config.path} not found")

    kind = config.kind
    logger.info("Opening %s as %s source", config.path, kind)
    if kind == "point":
        return CSVPointReader(
            config.path,
            id_name=config.id_name,
            x_name=config.x_name,
            y_name=config.y_name,
            time_name=config.timestamp_name,
            delimiter=config.delimiter,
        )
    if kind == "csv":
        return CSVTrajectoryReader(
            config.path,
            id_name=config.id_name,
            geom_name=config.geom_name,
            time_name=config.timestamp_name,
            delimiter=config.delimiter,
        )
    return VectorTrajectoryReader(config.path, id_name=config.id_name)
