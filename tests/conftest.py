"""Shared fixtures for tests."""

from __future__ import annotations

import base64
from pathlib import Path

import pytest


def build_message(
    sender: str | None = "Test User <test@example.com>",
    to: str | None = "recipient@example.com",
    subject: str = "Hello",
    date: str | None = "Mon, 15 Jan 2024 10:30:00 +0000",
    body: str = "Hello there!\n",
    extra_headers: str = "",
    envelope: str = "From test@example.com Mon Jan 15 10:30:00 2024",
    encoding: str = "utf-8",
) -> bytes:
    """Build one MBOX block (envelope line, headers, body, blank line)."""
    lines = [envelope]
    if sender is not None:
        lines.append(f"From: {sender}")
    if to is not None:
        lines.append(f"To: {to}")
    lines.append(f"Subject: {subject}")
    if date is not None:
        lines.append(f"Date: {date}")
    if extra_headers:
        lines.append(extra_headers.rstrip("\n"))
    lines.append("")
    return ("\n".join(lines) + "\n" + body + "\n").encode(encoding)


def pdf_attachment_message(filename: str = "report.pdf", content: bytes = b"%PDF-1.4 fake") -> bytes:
    encoded = base64.b64encode(content).decode("ascii")
    logo = base64.b64encode(b"\x89PNG\r\n\x1a\nfake").decode("ascii")
    body = (
        "--MIX\n"
        "Content-Type: text/plain; charset=utf-8\n"
        "\n"
        "See attached.\n"
        "--MIX\n"
        f'Content-Type: application/pdf; name="{filename}"\n'
        "Content-Transfer-Encoding: base64\n"
        f'Content-Disposition: attachment; filename="{filename}"\n'
        "\n"
        f"{encoded}\n"
        "--MIX\n"
        "Content-Type: image/png\n"
        "Content-Transfer-Encoding: base64\n"
        'Content-Disposition: attachment; filename="logo"\n'
        "\n"
        f"{logo}\n"
        "--MIX--\n"
    )
    return build_message(
        subject="Report",
        body=body,
        extra_headers='MIME-Version: 1.0\nContent-Type: multipart/mixed; boundary="MIX"',
    )


@pytest.fixture
def simple_block() -> bytes:
    return build_message()


@pytest.fixture
def sample_mbox(tmp_path: Path) -> Path:
    """Six blocks: 5 decodable (one without a sender) and 1 malformed.

    Bodies cover plain ASCII, multipart, base64, raw 8-bit latin-1 and raw
    UTF-8 without a declared charset; the sender-less message also has a raw
    UTF-8 subject.

    3 distinct non-empty senders (test@example.com twice), 4 distinct
    recipients (recipient@example.com twice).
    """
    multipart_body = (
        "--ALT\n"
        "Content-Type: text/plain; charset=utf-8\n"
        "\n"
        "Plain part\n"
        "--ALT\n"
        "Content-Type: text/html; charset=utf-8\n"
        "\n"
        "<p>HTML part</p>\n"
        "--ALT--\n"
    )
    b64_body = base64.b64encode("Bonjour à tous".encode("utf-8")).decode("ascii")

    blocks = [
        build_message(),
        build_message(
            to="bob@example.com",
            subject="Alternatives",
            body=multipart_body,
            extra_headers='MIME-Version: 1.0\nContent-Type: multipart/alternative; boundary="ALT"',
        ),
        build_message(
            sender="Alice <alice@example.com>",
            subject="Base64",
            body=b64_body,
            extra_headers="Content-Type: text/plain; charset=utf-8\nContent-Transfer-Encoding: base64",
            envelope="From alice@example.com Tue Jan 16 09:00:00 2024",
        ),
        build_message(
            sender="carol@example.com",
            to="dave@example.com",
            subject="Latin-1",
            body="Café au lait",
            extra_headers=(
                "Content-Type: text/plain; charset=iso-8859-1\n"
                "Content-Transfer-Encoding: 8bit"
            ),
            envelope="From carol@example.com Wed Jan 17 12:00:00 2024",
            encoding="iso-8859-1",
        ),
        build_message(
            sender=None,
            to="erin@example.com",
            subject="Résumé",
            body="Données reçues",
            envelope="From MAILER-DAEMON Thu Jan 18 08:00:00 2024",
        ),
        b"From broken@nowhere Fri Jan 19 00:00:00 2024\nthis line is not a header\n\n",
    ]
    path = tmp_path / "INBOX.mbox"
    path.write_bytes(b"".join(blocks))
    return path


@pytest.fixture
def attachment_mbox(tmp_path: Path) -> Path:
    """Two messages with the same date, each carrying report.pdf and logo (png)."""
    path = tmp_path / "attachments.mbox"
    path.write_bytes(
        pdf_attachment_message(content=b"%PDF first")
        + pdf_attachment_message(content=b"%PDF second")
    )
    return path
