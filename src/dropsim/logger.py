"""
CSV logging for trajectory samples.

Buffers rows in memory and writes in batches to minimize I/O overhead.
Implements context manager protocol for safe resource handling.
"""
from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, TextIO

from dropsim.dynamics.state import DataPoint

VALID_FIELDS = ("position", "velocity", "acceleration")


class CSVLogger:
    """
    Buffered CSV writer for ``DataPoint`` samples.

    Parameters
    ----------
    filepath : str | Path
        Output CSV file path. Parent directories are created.
    buffer_size : int
        Number of rows to buffer before writing.
    fields : list[str] | None
        Sample fields to record after the time column.
        Default: ["position", "velocity", "acceleration"]

    Examples
    --------
    >>> with CSVLogger("drop.csv") as logger:
    ...     stepper = Stepper(params, logger=logger)
    ...     ...  # drive stepper.advance()

    >>> logger = CSVLogger("drop.csv", buffer_size=1)
    >>> logger.log(point)
    >>> logger.close()  # Important!
    """

    def __init__(
        self,
        filepath: str | Path,
        buffer_size: int = 1000,
        fields: list[str] | None = None
    ) -> None:
        self.filepath = Path(filepath)
        self.buffer_size = buffer_size
        self.fields = list(fields) if fields is not None else list(VALID_FIELDS)

        invalid = set(self.fields) - set(VALID_FIELDS)
        if invalid:
            raise ValueError(
                f"Invalid fields: {invalid}. Valid options: {set(VALID_FIELDS)}"
            )

        self._buffer: list[list[str]] = []
        self._file: TextIO | None = None
        self._writer: Any = None  # csv.writer is a function, not a type
        self._header_written = False
        self.rows_logged = 0

        self.filepath.parent.mkdir(parents=True, exist_ok=True)

    def __enter__(self) -> CSVLogger:
        """Open file for writing."""
        self._file = open(self.filepath, "w", newline="", encoding="utf-8")
        self._writer = csv.writer(self._file)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Close file, flushing any remaining data."""
        self.close()

    def _write_header(self) -> None:
        if self._writer:
            self._writer.writerow(["t", *self.fields])
            if self._file:
                self._file.flush()  # Ensure header written immediately
        self._header_written = True

    def log(self, point: DataPoint) -> None:
        """
        Buffer one sample, writing to disk when the buffer is full.

        Opens the file on first call if not used as a context manager.
        """
        if self._file is None:
            self.__enter__()

        if not self._header_written:
            self._write_header()

        row = [f"{point.time:.10f}"]
        row.extend(f"{getattr(point, field):.10e}" for field in self.fields)
        self._buffer.append(row)
        self.rows_logged += 1

        if len(self._buffer) >= self.buffer_size:
            self.flush()

    def flush(self) -> None:
        """Write buffered data to disk and clear buffer."""
        if self._writer and self._buffer:
            self._writer.writerows(self._buffer)
            if self._file:
                self._file.flush()
            self._buffer.clear()

    def close(self) -> None:
        """Flush remaining data and close file."""
        self.flush()
        if self._file:
            self._file.close()
            self._file = None
            self._writer = None
