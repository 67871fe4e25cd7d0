"""Attachment extraction configuration."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from .constants import DEFAULT_ATTACHMENTS_DIR, EXTRACTION_OPTIONS
from .errors import ConfigError, ExtractionUsageError


def parse_filetypes(value: Any) -> tuple[str, ...]:
    """Normalize a file-type whitelist.

    Accepts a list (``["pdf", ".PNG"]``) or a comma-separated string
    (``"pdf,png"``). Returns lower-case extensions without dots, in order,
    without duplicates.
    """
    if value is None:
        return ()
    items = value.split(",") if isinstance(value, str) else list(value)

    result: list[str] = []
    for item in items:
        ext = str(item).strip().lstrip(".").lower()
        if ext and ext not in result:
            result.append(ext)
    return tuple(result)


@dataclass(frozen=True)
class ExtractionConfig:
    """Options for attachment extraction: extract, filetypes, output_folder."""

    extract: bool = False
    filetypes: tuple[str, ...] = ()
    output_folder: Path = DEFAULT_ATTACHMENTS_DIR

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> ExtractionConfig:
        unknown = sorted(set(options) - set(EXTRACTION_OPTIONS))
        if unknown:
            raise ConfigError(f"Unknown extraction option(s): {', '.join(unknown)}")

        return cls(
            extract=bool(options.get("extract", False)),
            filetypes=parse_filetypes(options.get("filetypes")),
            output_folder=Path(options.get("output_folder") or DEFAULT_ATTACHMENTS_DIR),
        )

    def validate(self) -> ExtractionConfig:
        """Raise ExtractionUsageError if extraction is on without file types."""
        if self.extract and not self.filetypes:
            raise ExtractionUsageError(
                "Attachment extraction needs at least one file type (e.g. pdf,png)."
            )
        return self


def load_extraction_config(path: Path) -> ExtractionConfig:
    """Read an ExtractionConfig from a JSON file."""
    try:
        with open(path) as f:
            options = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not read extraction config {path}: {e}") from e

    if not isinstance(options, dict):
        raise ConfigError(f"Extraction config {path} must contain a JSON object.")

    return ExtractionConfig.from_mapping(options)
