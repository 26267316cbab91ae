from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, TypeVar

from trajio.core.errors import ConfigurationError, MalformedFieldError

T = TypeVar("T")


def check_delimiter(delimiter: str) -> str:
    if not isinstance(delimiter, str) or len(delimiter) != 1:
        raise ConfigurationError(
            f"Delimiter must be a single character, got {delimiter!r}"
        )
    return delimiter


def tokenize(line: str, delimiter: str = ",") -> List[str]:
    """
    Splits one record into its fields.
    No trimming and no quoting: 'a,,b,' gives ['a', '', 'b', ''].
    """
    return line.rstrip("\r\n").split(delimiter)


@dataclass(frozen=True)
class FieldSchema:
    """
    Column position of each logical role of a delimited file.
    Optional roles that were not found map to None.
    """
    indices: Mapping[str, Optional[int]]
    names: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # Immutable once resolved
        object.__setattr__(self, "indices", MappingProxyType(dict(self.indices)))
        object.__setattr__(self, "names", MappingProxyType(dict(self.names)))

    def index(self, role: str) -> Optional[int]:
        return self.indices[role]

    def has(self, role: str) -> bool:
        return self.indices.get(role) is not None

    def column_name(self, role: str) -> str:
        return self.names.get(role, role)


def resolve_schema(
    header: str,
    required: Dict[str, str],
    optional: Optional[Dict[str, str]] = None,
    delimiter: str = ",",
) -> FieldSchema:
    """
    Maps each role to the position of its column in the header row.

    Args:
        header: The header line of the file.
        required: role -> column name; every one of them must be present.
        optional: role -> column name; missing ones (or empty names) resolve to None.
        delimiter: Field separator of the file.

    Returns:
        The resolved FieldSchema.

    Raises:
        ConfigurationError: If any required column is not in the header.
    """
    optional = optional or {}
    columns = tokenize(header, check_delimiter(delimiter))

    # First occurrence wins for duplicated column names
    positions: Dict[str, int] = {}
    for i, name in enumerate(columns):
        positions.setdefault(name, i)

    indices: Dict[str, Optional[int]] = {}
    missing = []
    for role, name in required.items():
        if name in positions:
            indices[role] = positions[name]
        else:
            missing.append(name)
    if missing:
        names = ", ".join(repr(m) for m in missing)
        raise ConfigurationError(f"Column {names} not found in header {columns}")

    for role, name in optional.items():
        indices[role] = positions.get(name) if name else None

    return FieldSchema(indices=indices, names={**required, **optional})


def parse_field(
    fields: List[str],
    schema: FieldSchema,
    role: str,
    line_number: int,
    convert: Callable[[str], T],
) -> T:
    """
    Converts the field of `role` in a tokenized record.

    Raises:
        MalformedFieldError: If the record is too short or the value does not convert.
    """
    idx = schema.index(role)
    column = schema.column_name(role)
    if idx >= len(fields):
        raise MalformedFieldError(
            line_number, column, "", f"record has only {len(fields)} fields"
        )
    raw = fields[idx]
    try:
        return convert(raw)
    except ValueError as e:
        raise MalformedFieldError(line_number, column, raw, str(e)) from e


def parse_timestamps(value: str) -> List[float]:
    """
    Reads a comma separated list of numbers, e.g. '0,15.5,31'.
    Stops at the first entry that is not a number.
    """
    timestamps = []
    for token in value.split(","):
        try:
            timestamps.append(float(token))
        except ValueError:
            break
    return timestamps
