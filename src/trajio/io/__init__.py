from .reader import TrajectoryReader
from .csv_reader import CSVTrajectoryReader
from .point_reader import CSVPointReader
from .vector_reader import VectorTrajectoryReader
from .writer import CSVTrajectoryWriter
from .factory import open_reader
