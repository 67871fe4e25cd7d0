"""Text normalization and content-transfer decoding."""

from __future__ import annotations

import base64
import codecs
import quopri

from .constants import OUTPUT_ENCODING, PLACEHOLDER

_ERROR_HANDLER = "mbox2csv-placeholder"


def _placeholder_handler(exc: UnicodeError) -> tuple[str, int]:
    # One placeholder per invalid span reported by the codec
    return (PLACEHOLDER, exc.end)


codecs.register_error(_ERROR_HANDLER, _placeholder_handler)


def _resolve_codec(charset: str | None) -> str:
    """Return a usable codec name, falling back to the output encoding."""
    if not charset:
        return OUTPUT_ENCODING
    try:
        return codecs.lookup(charset.strip().strip('"').lower()).name
    except LookupError:
        return OUTPUT_ENCODING


def normalize(value: bytes | str | None, charset: str | None = None) -> str:
    """Return ``value`` as valid text in the output encoding.

    Bytes are decoded under ``charset`` (the output encoding when empty or
    unknown). Text is re-encoded as-is. Invalid byte sequences and
    characters the output encoding cannot represent become ``?``.
    Never raises.
    """
    if not value:
        return ""

    if isinstance(value, str):
        text = value
    else:
        data = bytes(value)
        try:
            text = data.decode(_resolve_codec(charset), errors=_ERROR_HANDLER)
        except (LookupError, ValueError, TypeError):
            # bytes-to-bytes codecs (base64, rot13, ...) and codecs without
            # error-handler support
            text = data.decode(OUTPUT_ENCODING, errors=_ERROR_HANDLER)

    encoded = text.encode(OUTPUT_ENCODING, errors=_ERROR_HANDLER)
    return encoded.decode(OUTPUT_ENCODING, errors=_ERROR_HANDLER)


def transfer_decode(payload: bytes, encoding: str | None) -> bytes:
    """Reverse a content-transfer-encoding.

    ``base64`` and ``quoted-printable`` are decoded; any other encoding
    (7bit, 8bit, binary, none) leaves the bytes unchanged. Malformed base64
    raises ``binascii.Error``.
    """
    name = (encoding or "").strip().lower()
    if name == "base64":
        return base64.b64decode(payload)
    if name == "quoted-printable":
        return quopri.decodestring(payload)
    return payload
