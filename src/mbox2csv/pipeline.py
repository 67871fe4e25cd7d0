"""Run orchestration - split, decode, export, aggregate, extract."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Iterator

from .attachments import AttachmentExtractor
from .config import ExtractionConfig
from .constants import EMAIL_HEADER
from .decoder import decode_block
from .errors import MessageDecodeError
from .export import (
    CsvTableWriter,
    append_csv_row,
    ensure_directory,
    sender_export_path,
    write_recipient_statistics,
    write_sender_statistics,
)
from .models import DecodedMessage, ExtractionResult, ParseResult
from .splitter import iter_blocks
from .stats import StatisticsAggregator, has_sender

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


def _iter_decoded(
    mbox_path: Path,
    result: ParseResult | ExtractionResult,
    callback: ProgressCallback | None = None,
) -> Iterator[DecodedMessage]:
    """Yield decoded messages, logging and skipping blocks that fail.

    Opening the archive is the only fatal step; its OSError propagates.
    """
    total = os.path.getsize(mbox_path)
    done = 0

    with open(mbox_path, "rb") as mbox:
        for raw in iter_blocks(mbox):
            result.blocks_seen += 1
            done += len(raw)
            try:
                decoded = decode_block(raw)
            except MessageDecodeError as e:
                result.blocks_skipped += 1
                logger.warning("Error processing email block %d: %s", result.blocks_seen, e)
                decoded = None

            if decoded is not None:
                yield decoded

            if callback:
                callback(done, total)


def _write_sender_row(per_sender_dir: Path, decoded: DecodedMessage) -> bool:
    sender = decoded.message.sender
    path = sender_export_path(per_sender_dir, sender)
    try:
        append_csv_row(path, EMAIL_HEADER, decoded.message.as_row())
    except OSError as e:
        logger.warning("Could not write per-sender export for %s (%s): %s", sender, path, e)
        return False
    return True


def parse_mbox(
    mbox_path: Path,
    output_csv: Path,
    sender_stats_csv: Path,
    recipient_stats_csv: Path,
    per_sender_dir: Path | None = None,
    extraction: ExtractionConfig | None = None,
    callback: ProgressCallback | None = None,
) -> ParseResult:
    """Export every message of an MBOX archive and its statistics.

    Writes one main CSV row per decodable message, optional per-sender
    tables and attachments, then the sender and recipient statistics.
    """
    mbox_path = Path(mbox_path)
    result = ParseResult(
        output_csv=Path(output_csv),
        sender_stats_csv=Path(sender_stats_csv),
        recipient_stats_csv=Path(recipient_stats_csv),
        per_sender_dir=Path(per_sender_dir) if per_sender_dir is not None else None,
    )

    extractor = None
    if extraction is not None and extraction.validate().extract:
        extractor = AttachmentExtractor(extraction.filetypes, extraction.output_folder)

    # Fail on a missing archive before truncating any output
    if not mbox_path.is_file():
        raise FileNotFoundError(f"MBOX file not found: {mbox_path}")

    if result.per_sender_dir is not None:
        ensure_directory(result.per_sender_dir)

    statistics = StatisticsAggregator()

    with CsvTableWriter(result.output_csv, EMAIL_HEADER) as emails:
        for decoded in _iter_decoded(mbox_path, result, callback):
            message = decoded.message
            emails.append(message.as_row())
            result.messages_written += 1

            if result.per_sender_dir is not None and has_sender(message.sender):
                if not _write_sender_row(result.per_sender_dir, decoded):
                    result.per_sender_failures += 1

            statistics.record(message.sender, message.recipients, len(message.body))

            if extractor is not None:
                result.attachments_written = extractor.extract(decoded)

    logger.info("Parsing completed. Data saved to %s", result.output_csv)

    result.sender_stats = statistics.finalize_sender_report()
    result.recipient_stats = statistics.finalize_recipient_report()
    write_sender_statistics(result.sender_stats_csv, result.sender_stats)
    write_recipient_statistics(result.recipient_stats_csv, result.recipient_stats)

    return result


def extract_attachments(
    mbox_path: Path,
    config: ExtractionConfig,
    callback: ProgressCallback | None = None,
) -> ExtractionResult:
    """Save whitelisted attachments from every message in the archive.

    Raises ExtractionUsageError before reading anything when extraction is
    enabled without file types. With extraction disabled this is a no-op.
    """
    config.validate()
    result = ExtractionResult(output_folder=Path(config.output_folder))
    if not config.extract:
        logger.info("Attachment extraction disabled; nothing to do.")
        return result

    extractor = AttachmentExtractor(config.filetypes, config.output_folder)
    for decoded in _iter_decoded(Path(mbox_path), result, callback):
        result.files_written = extractor.extract(decoded)

    logger.info("Saved %d attachment(s) to %s", result.files_written, result.output_folder)
    return result
