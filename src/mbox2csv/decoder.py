"""Decode raw message blocks into normalized messages and attachments."""

from __future__ import annotations

import logging
from datetime import datetime
from email import policy
from email.errors import HeaderParseError
from email.header import decode_header, make_header
from email.message import Message
from email.parser import BytesParser
from email.utils import getaddresses, parsedate_to_datetime

from .constants import OUTPUT_ENCODING
from .errors import MessageDecodeError
from .models import (
    AttachmentPayload,
    Body,
    DecodedMessage,
    MultipartAlternative,
    NormalizedMessage,
    PlainText,
)
from .normalizer import normalize, transfer_decode

logger = logging.getLogger(__name__)

# Content-transfer-encodings the stdlib would decode in get_payload(decode=True)
_TEXT_PAYLOAD_ENCODINGS = frozenset(
    {"base64", "quoted-printable", "x-uuencode", "uuencode", "uue", "x-uue"}
)


class _Utf8HeaderPolicy(policy.Compat32):
    """compat32, except 8-bit header bytes are read as UTF-8 text.

    Stock compat32 wraps such headers in an ``unknown-8bit`` Header whose
    str() loses every high byte.
    """

    def header_fetch_parse(self, name, value):
        try:
            value.encode(OUTPUT_ENCODING)
        except UnicodeEncodeError:
            # non-ASCII input bytes are stored as surrogate escapes
            return normalize(value.encode(OUTPUT_ENCODING, "surrogateescape"), OUTPUT_ENCODING)
        return value


_PARSER = BytesParser(policy=_Utf8HeaderPolicy())


def _raw_payload(part: Message, transfer_encoding: str) -> bytes:
    """Return a leaf part's payload bytes, still transfer-encoded."""
    if transfer_encoding in _TEXT_PAYLOAD_ENCODINGS:
        payload = part.get_payload()
        if not payload:
            return b""
        return str(payload).encode(OUTPUT_ENCODING, "surrogateescape")

    # Other encodings come back as the original 8-bit bytes
    payload = part.get_payload(decode=True)
    return payload if isinstance(payload, bytes) else b""


def _is_attachment(part: Message) -> bool:
    return part.get_content_disposition() == "attachment" or bool(part.get_filename())


def build_body(part: Message) -> Body:
    """Turn a parsed message (or sub-part) into a ``Body`` tree."""
    if part.is_multipart():
        return MultipartAlternative(
            parts=tuple(build_body(sub) for sub in part.get_payload())
        )
    transfer_encoding = str(part.get("Content-Transfer-Encoding", "")).strip().lower()
    return PlainText(
        content_type=part.get_content_type(),
        payload=_raw_payload(part, transfer_encoding),
        transfer_encoding=transfer_encoding,
        charset=part.get_content_charset() or "",
        is_attachment=_is_attachment(part),
    )


def _first_leaf(body: Body, content_type: str) -> PlainText | None:
    if isinstance(body, PlainText):
        if body.content_type == content_type and not body.is_attachment:
            return body
        return None
    for part in body.parts:
        found = _first_leaf(part, content_type)
        if found is not None:
            return found
    return None


def select_body(body: Body) -> PlainText | None:
    """Pick the part that becomes the message body.

    A flat message uses its only part. A multipart message prefers the
    first ``text/plain`` part and falls back to the first ``text/html`` one.
    """
    if isinstance(body, PlainText):
        return body
    return _first_leaf(body, "text/plain") or _first_leaf(body, "text/html")


def _decode_header_text(raw: str | None) -> str:
    """Decode RFC 2047 encoded-words, keeping the raw value if that fails."""
    if not raw:
        return ""
    try:
        return str(make_header(decode_header(str(raw))))
    except (HeaderParseError, LookupError, UnicodeError) as e:
        logger.debug("Could not decode header %r: %s", raw, e)
        return str(raw)


def _addresses(msg: Message, name: str) -> tuple[str, ...]:
    values = [str(v) for v in msg.get_all(name, [])]
    return tuple(
        normalize(addr) for _display, addr in getaddresses(values) if addr
    )


def _parse_date(raw: str | None) -> datetime | None:
    if not raw:
        return None
    try:
        return parsedate_to_datetime(str(raw))
    except (TypeError, ValueError, IndexError):
        return None


def _decode_body(msg: Message, body: Body) -> str:
    selected = select_body(body)
    if selected is None:
        return ""
    payload = transfer_decode(selected.payload, selected.transfer_encoding)
    charset = selected.charset or msg.get_content_charset() or ""
    return normalize(payload, charset)


def _collect_attachments(msg: Message) -> tuple[AttachmentPayload, ...]:
    attachments: list[AttachmentPayload] = []
    for part in msg.walk():
        if part.is_multipart() or not _is_attachment(part):
            continue
        raw = part.get_payload(decode=True)
        attachments.append(
            AttachmentPayload(
                original_filename=normalize(_decode_header_text(part.get_filename())),
                mime_type=part.get_content_type(),
                raw_bytes=raw if isinstance(raw, bytes) else b"",
            )
        )
    return tuple(attachments)


def decode_block(raw: bytes) -> DecodedMessage:
    """Decode one raw MBOX block.

    Raises MessageDecodeError for anything that prevents a usable message;
    callers are expected to log it and skip the block.
    """
    try:
        msg = _PARSER.parsebytes(raw)
        if not msg.keys():
            raise MessageDecodeError("block has no message headers")

        sent_at = _parse_date(msg.get("Date"))
        body = build_body(msg)
        message = NormalizedMessage(
            sender=normalize(", ".join(_addresses(msg, "From"))),
            recipients=_addresses(msg, "To"),
            subject=normalize(_decode_header_text(msg.get("Subject"))),
            date=normalize(sent_at.isoformat() if sent_at else ""),
            body=_decode_body(msg, body),
        )
        attachments = _collect_attachments(msg)
    except MessageDecodeError:
        raise
    except Exception as e:
        raise MessageDecodeError(f"{type(e).__name__}: {e}") from e

    return DecodedMessage(message=message, attachments=attachments, sent_at=sent_at)
