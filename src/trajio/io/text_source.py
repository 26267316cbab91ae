from pathlib import Path
from typing import Optional, Tuple

from trajio.core.errors import ConfigurationError, ExhaustedSourceError, MalformedFieldError

ENCODING = "utf-8"


class LineSource:
    """
    Forward-only reader over the data lines of a delimited text file.
    The header is read once at open time; blank lines are skipped.
    Lines are numbered from 1 (the header) so errors can point at them.
    Each line is decoded on its own, so one undecodable line only fails that line.
    """

    def __init__(self, filepath: str | Path):
        self.filepath = Path(filepath)
        try:
            self._file = open(self.filepath, mode="rb")
        except OSError as e:
            raise ConfigurationError(f"Cannot open {self.filepath}: {e}") from e

        raw = self._file.readline()
        try:
            self.header = raw.rstrip(b"\r\n").decode(ENCODING)
        except UnicodeDecodeError as e:
            self._file.close()
            raise ConfigurationError(f"{self.filepath} header is not valid {ENCODING}: {e}") from e
        if not self.header:
            self._file.close()
            raise ConfigurationError(f"{self.filepath} has no header line")
        self.line_number = 1
        self._peeked: Optional[Tuple[int, str | MalformedFieldError]] = None

    def _fetch(self) -> Optional[Tuple[int, str | MalformedFieldError]]:
        for raw in iter(self._file.readline, b""):
            self.line_number += 1
            raw = raw.rstrip(b"\r\n")
            if not raw:
                continue
            try:
                return self.line_number, raw.decode(ENCODING)
            except UnicodeDecodeError as e:
                # Raised when the line is consumed
                return self.line_number, MalformedFieldError(
                    self.line_number, "<line>", raw.decode(ENCODING, errors="replace"), str(e)
                )
        return None

    def has_next(self) -> bool:
        if self._peeked is None:
            self._peeked = self._fetch()
        return self._peeked is not None

    def next_line(self) -> Tuple[int, str]:
        """
        Returns (line_number, line) of the next data line.

        Raises:
            MalformedFieldError: If the line is not valid UTF-8. The line is consumed.
        """
        if not self.has_next():
            raise ExhaustedSourceError(f"No more lines in {self.filepath}")
        (line_number, line), self._peeked = self._peeked, None
        if isinstance(line, MalformedFieldError):
            raise line
        return line_number, line

    def rewind(self):
        self._file.seek(0)
        self._file.readline()
        self.line_number = 1
        self._peeked = None

    def close(self):
        self._file.close()
