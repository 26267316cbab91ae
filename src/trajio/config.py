from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping

from trajio.core.errors import ConfigurationError

TEXT_SUFFIXES = {".csv", ".txt"}


@dataclass(frozen=True)
class GPSConfig:
    """
    Describes a trajectory source and the names of its columns.

    gps_point selects the point-per-row layout (id, x, y[, timestamp]);
    otherwise .csv/.txt files hold one trajectory per row (id, geom[, timestamp])
    and any other file is opened as a vector dataset.
    """
    file: str | Path
    id_name: str = "id"
    geom_name: str = "geom"
    x_name: str = "x"
    y_name: str = "y"
    timestamp_name: str = "timestamp"
    gps_point: bool = False
    delimiter: str = ","

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GPSConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown GPS config keys: {', '.join(unknown)}")
        if "file" not in data:
            raise ConfigurationError("GPS config requires 'file'")
        return cls(**data)

    @property
    def path(self) -> Path:
        return Path(self.file)

    @property
    def kind(self) -> str:
        if self.gps_point:
            return "point"
        if self.path.suffix.lower() in TEXT_SUFFIXES:
            return "csv"
        return "vector"
