"""Data models for mbox2csv."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Union


# --- Message body variants ---


@dataclass(frozen=True)
class PlainText:
    """A single (non-multipart) body part, still transfer-encoded."""

    content_type: str
    payload: bytes
    transfer_encoding: str = ""
    charset: str = ""
    is_attachment: bool = False


@dataclass(frozen=True)
class MultipartAlternative:
    """A multipart container holding its sub-parts in source order."""

    parts: tuple[Body, ...] = ()


Body = Union[PlainText, MultipartAlternative]


# --- Decoded messages ---


@dataclass(frozen=True)
class NormalizedMessage:
    """Normalized fields of one message, ready to become an export row."""

    sender: str = ""
    recipients: tuple[str, ...] = ()
    subject: str = ""
    date: str = ""
    body: str = ""

    @property
    def to_field(self) -> str:
        return ", ".join(self.recipients)

    def as_row(self) -> list[str]:
        return [self.sender, self.to_field, self.subject, self.date, self.body]


@dataclass(frozen=True)
class AttachmentPayload:
    """A binary attachment taken from a message."""

    original_filename: str = ""
    mime_type: str = ""
    raw_bytes: bytes = b""


@dataclass(frozen=True)
class DecodedMessage:
    """Everything the decoder derives from one raw block."""

    message: NormalizedMessage
    attachments: tuple[AttachmentPayload, ...] = ()
    sent_at: datetime | None = None


@dataclass(frozen=True)
class PlannedAttachment:
    """Where and what an attachment would be written as, before any I/O."""

    filename: str
    extension: str
    raw_bytes: bytes


# --- Statistics ---


@dataclass(frozen=True)
class SenderStatRecord:
    sender: str
    email_count: int
    average_body_length_chars: float

    def as_row(self) -> list:
        return [self.sender, self.email_count, self.average_body_length_chars]


@dataclass(frozen=True)
class RecipientStatRecord:
    recipient: str
    email_count: int

    def as_row(self) -> list:
        return [self.recipient, self.email_count]


# --- Run summaries ---


@dataclass
class ParseResult:
    """Summary of a full parse run."""

    blocks_seen: int = 0
    messages_written: int = 0
    blocks_skipped: int = 0
    output_csv: Path | None = None
    sender_stats_csv: Path | None = None
    recipient_stats_csv: Path | None = None
    per_sender_dir: Path | None = None
    per_sender_failures: int = 0
    attachments_written: int = 0
    sender_stats: list[SenderStatRecord] = field(default_factory=list)
    recipient_stats: list[RecipientStatRecord] = field(default_factory=list)


@dataclass
class ExtractionResult:
    """Summary of an attachment-only run."""

    blocks_seen: int = 0
    blocks_skipped: int = 0
    files_written: int = 0
    output_folder: Path | None = None
