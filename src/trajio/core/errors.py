class TrajectoryReaderError(Exception):
    """Base class for errors raised while opening or reading a trajectory source."""


class ConfigurationError(TrajectoryReaderError):
    """
    Fatal setup error: the source cannot be opened, a required column is
    missing or the geometry kind is wrong. There is no usable reader.
    """


class MalformedFieldError(TrajectoryReaderError, ValueError):
    """A single record holds a field that cannot be parsed."""

    def __init__(self, line_number: int, column: str, value: str, reason: str = ""):
        self.line_number = line_number
        self.column = column
        self.value = value
        message = f"Line {line_number}: cannot parse column '{column}' value {value!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class ExhaustedSourceError(TrajectoryReaderError):
    """A read was requested but the source has nothing left."""


class ReaderClosedError(TrajectoryReaderError):
    """The reader was used after close()."""
