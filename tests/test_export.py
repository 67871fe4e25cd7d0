"""Tests for the CSV export writers."""

import csv

from mbox2csv.constants import EMAIL_HEADER
from mbox2csv.export import (
    CsvTableWriter,
    append_csv_row,
    ensure_directory,
    sender_export_path,
    write_recipient_statistics,
    write_sender_statistics,
)
from mbox2csv.models import RecipientStatRecord, SenderStatRecord


def _read(path):
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


def test_writer_writes_header_and_rows(tmp_path):
    path = tmp_path / "emails.csv"
    with CsvTableWriter(path, EMAIL_HEADER) as writer:
        writer.append(["a@x.com", "b@x.com", "Hi", "", "line one\nline two"])

    assert _read(path) == [
        ["From", "To", "Subject", "Date", "Body"],
        ["a@x.com", "b@x.com", "Hi", "", "line one\nline two"],
    ]


def test_write_mode_truncates_previous_run(tmp_path):
    path = tmp_path / "emails.csv"
    with CsvTableWriter(path, EMAIL_HEADER) as writer:
        writer.append(["old"] * 5)
    with CsvTableWriter(path, EMAIL_HEADER) as writer:
        writer.append(["new"] * 5)

    assert _read(path) == [EMAIL_HEADER, ["new"] * 5]


def test_append_writes_header_only_once(tmp_path):
    path = tmp_path / "sender.csv"
    append_csv_row(path, EMAIL_HEADER, ["1"] * 5)
    append_csv_row(path, EMAIL_HEADER, ["2"] * 5)

    assert _read(path) == [EMAIL_HEADER, ["1"] * 5, ["2"] * 5]


def test_append_to_empty_file_writes_header(tmp_path):
    path = tmp_path / "sender.csv"
    path.touch()
    append_csv_row(path, EMAIL_HEADER, ["1"] * 5)

    assert _read(path)[0] == EMAIL_HEADER


def test_sender_export_path_is_sanitized(tmp_path):
    assert sender_export_path(tmp_path, "test@example.com") == tmp_path / "test@example.com.csv"
    assert sender_export_path(tmp_path, "a/b c@x.com") == tmp_path / "a_b_c@x.com.csv"


def test_statistics_files(tmp_path):
    senders = tmp_path / "senders.csv"
    recipients = tmp_path / "recipients.csv"
    write_sender_statistics(senders, [SenderStatRecord("a@x.com", 2, 15.5)])
    write_recipient_statistics(recipients, [RecipientStatRecord("r@x.com", 3)])

    assert _read(senders) == [
        ["Sender", "Email Count", "Average Body Length (chars)"],
        ["a@x.com", "2", "15.5"],
    ]
    assert _read(recipients) == [["Recipient", "Email Count"], ["r@x.com", "3"]]


def test_ensure_directory_creates_parents(tmp_path):
    target = tmp_path / "a" / "b"
    assert ensure_directory(target) == target
    assert target.is_dir()
    ensure_directory(target)
