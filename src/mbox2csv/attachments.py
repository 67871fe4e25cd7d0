"""Attachment extraction - filter by file type, name safely, write to disk."""

from __future__ import annotations

import logging
import os
import re
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable

from .constants import (
    DEFAULT_ATTACHMENT_BASE,
    FALLBACK_EXTENSION,
    MIME_EXTENSIONS,
    UNKNOWN_DATE,
    UNKNOWN_TIME,
)
from .errors import ExtractionUsageError
from .export import ensure_directory
from .models import AttachmentPayload, DecodedMessage, PlannedAttachment

logger = logging.getLogger(__name__)

_UNSAFE_CHARS_RE = re.compile(r"[^0-9A-Za-z-]")


def normalize_extension(value: str) -> str:
    """Lower-case an extension and drop any leading dots."""
    return value.strip().lstrip(".").lower()


def sanitize_base_name(name: str) -> str:
    """Replace every character outside ``[0-9A-Za-z-]`` with ``_``."""
    return _UNSAFE_CHARS_RE.sub("_", name)


def split_filename(filename: str, mime_type: str = "") -> tuple[str, str]:
    """Return ``(base, extension)`` for an attachment.

    The extension comes from the filename when it has one, otherwise from
    the MIME type (``bin`` for unknown types).
    """
    base, ext = os.path.splitext(os.path.basename(filename or ""))
    ext = normalize_extension(ext)
    if not ext:
        ext = MIME_EXTENSIONS.get((mime_type or "").lower(), FALLBACK_EXTENSION)
    return base, ext


def timestamp_parts(sent_at: datetime | None) -> tuple[str, str]:
    if sent_at is None:
        return (UNKNOWN_DATE, UNKNOWN_TIME)
    return (sent_at.strftime("%Y-%m-%d"), sent_at.strftime("%H-%M-%S"))


def plan_attachment(
    payload: AttachmentPayload,
    sent_at: datetime | None,
    wanted_extensions: Iterable[str],
) -> PlannedAttachment | None:
    """Work out the output filename for ``payload``, or None if unwanted."""
    base, ext = split_filename(payload.original_filename, payload.mime_type)
    if ext not in set(wanted_extensions):
        return None

    safe_base = sanitize_base_name(base) or DEFAULT_ATTACHMENT_BASE
    date_part, time_part = timestamp_parts(sent_at)
    return PlannedAttachment(
        filename=f"{safe_base}_{date_part}_{time_part}.{ext}",
        extension=ext,
        raw_bytes=payload.raw_bytes,
    )


def resolve_path(
    output_dir: Path,
    filename: str,
    exists: Callable[[Path], bool] = os.path.exists,
) -> Path:
    """Return a path in ``output_dir`` that does not exist yet.

    ``report.pdf`` becomes ``report_1.pdf``, ``report_2.pdf``, ... until
    ``exists`` reports a free name.
    """
    candidate = Path(output_dir) / filename
    stem, suffix = os.path.splitext(filename)
    counter = 1
    while exists(candidate):
        candidate = Path(output_dir) / f"{stem}_{counter}{suffix}"
        counter += 1
    return candidate


class AttachmentExtractor:
    """Write whitelisted attachments of decoded messages to a directory.

    ``written_count`` is the number of files written over the extractor's
    lifetime, i.e. across a whole run.
    """

    def __init__(self, wanted_extensions: Iterable[str], output_dir: Path) -> None:
        self.wanted_extensions = frozenset(
            normalize_extension(e) for e in wanted_extensions if normalize_extension(e)
        )
        if not self.wanted_extensions:
            raise ExtractionUsageError(
                "Attachment extraction needs at least one file type (e.g. pdf,png)."
            )
        self.output_dir = Path(output_dir)
        self.written_count = 0

    def extract(self, decoded: DecodedMessage) -> int:
        """Write every wanted attachment of ``decoded``.

        Failures are logged per attachment and do not stop the others.
        Returns the running total of files written.
        """
        for payload in decoded.attachments:
            try:
                planned = plan_attachment(payload, decoded.sent_at, self.wanted_extensions)
                if planned is None:
                    continue
                ensure_directory(self.output_dir)
                path = resolve_path(self.output_dir, planned.filename)
                path.write_bytes(planned.raw_bytes)
            except (OSError, ValueError, TypeError) as e:
                logger.warning(
                    "Could not save attachment %r from %s: %s",
                    payload.original_filename,
                    decoded.message.sender or "<no sender>",
                    e,
                )
                continue

            self.written_count += 1
            logger.debug("Saved attachment %s", path)

        return self.written_count
