"""CSV export of messages and statistics."""

from __future__ import annotations

import csv
import re
from pathlib import Path
from typing import Iterable, Sequence

from .constants import OUTPUT_ENCODING, RECIPIENT_STATS_HEADER, SENDER_STATS_HEADER
from .models import RecipientStatRecord, SenderStatRecord

_SENDER_FILENAME_RE = re.compile(r"[^0-9A-Za-z@._-]")


def ensure_directory(path: Path) -> Path:
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def _needs_header(path: Path) -> bool:
    return not path.exists() or path.stat().st_size == 0


class CsvTableWriter:
    """A CSV table written row by row.

    The header row is written only when the file is new or empty, so
    ``mode="a"`` keeps appending to an existing table.
    """

    def __init__(self, path: Path, header: Sequence[str], mode: str = "w") -> None:
        self.path = Path(path)
        self.header = list(header)
        self.mode = mode
        self._file = None
        self._writer = None

    def open(self) -> CsvTableWriter:
        write_header = self.mode == "w" or _needs_header(self.path)
        self._file = open(self.path, self.mode, newline="", encoding=OUTPUT_ENCODING)
        self._writer = csv.writer(self._file)
        if write_header:
            self._writer.writerow(self.header)
        return self

    def append(self, row: Sequence) -> None:
        if self._writer is None:
            raise RuntimeError(f"{self.path} is not open")
        self._writer.writerow(list(row))

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
        self._file = None
        self._writer = None

    # --- context manager ---

    def __enter__(self) -> CsvTableWriter:
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        self.close()


def append_csv_row(path: Path, header: Sequence[str], row: Sequence) -> None:
    """Append one row to ``path``, writing ``header`` first if the file is new."""
    with CsvTableWriter(path, header, mode="a") as writer:
        writer.append(row)


def sender_export_path(directory: Path, sender: str) -> Path:
    """Per-sender CSV path, named after the sanitized sender address."""
    return Path(directory) / f"{_SENDER_FILENAME_RE.sub('_', sender)}.csv"


def write_sender_statistics(path: Path, records: Iterable[SenderStatRecord]) -> None:
    with CsvTableWriter(path, SENDER_STATS_HEADER) as writer:
        for record in records:
            writer.append(record.as_row())


def write_recipient_statistics(path: Path, records: Iterable[RecipientStatRecord]) -> None:
    with CsvTableWriter(path, RECIPIENT_STATS_HEADER) as writer:
        for record in records:
            writer.append(record.as_row())
