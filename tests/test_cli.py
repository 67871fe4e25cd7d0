"""Tests for the CLI module."""

import csv
import json

from click.testing import CliRunner

from mbox2csv.cli import cli


def test_cli_help():
    """CLI --help should work and show commands."""
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "parse" in result.output
    assert "attachments" in result.output


def test_cli_version():
    """CLI --version should show version."""
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_parse_writes_outputs(sample_mbox, tmp_path):
    emails = tmp_path / "emails.csv"
    runner = CliRunner()
    result = runner.invoke(
        cli,
        [
            "parse",
            str(sample_mbox),
            "-o", str(emails),
            "--sender-stats", str(tmp_path / "senders.csv"),
            "--recipient-stats", str(tmp_path / "recipients.csv"),
        ],
    )
    assert result.exit_code == 0, result.output
    assert "Parsing completed" in result.output
    assert "test@example.com" in result.output
    with open(emails, newline="", encoding="utf-8") as f:
        assert len(list(csv.DictReader(f))) == 5


def test_parse_missing_file():
    """A missing archive should be rejected before anything runs."""
    runner = CliRunner()
    result = runner.invoke(cli, ["parse", "does-not-exist.mbox"])
    assert result.exit_code != 0


def test_attachments_without_filetypes_is_usage_error(attachment_mbox, tmp_path):
    out = tmp_path / "att"
    runner = CliRunner()
    result = runner.invoke(cli, ["attachments", str(attachment_mbox), "-o", str(out)])
    assert result.exit_code == 2
    assert "file type" in result.output
    assert not out.exists()


def test_attachments_extracts_files(attachment_mbox, tmp_path):
    out = tmp_path / "att"
    runner = CliRunner()
    result = runner.invoke(
        cli, ["attachments", str(attachment_mbox), "--filetypes", "pdf", "-o", str(out)]
    )
    assert result.exit_code == 0, result.output
    assert "Saved 2 attachment(s)" in result.output
    assert len(list(out.iterdir())) == 2


def test_attachments_from_config_file(attachment_mbox, tmp_path):
    out = tmp_path / "att"
    config = tmp_path / "extract.json"
    config.write_text(json.dumps({"extract": True, "filetypes": ["png"], "output_folder": str(out)}))

    runner = CliRunner()
    result = runner.invoke(cli, ["attachments", str(attachment_mbox), "-c", str(config)])
    assert result.exit_code == 0, result.output
    assert sorted(p.suffix for p in out.iterdir()) == [".png", ".png"]


def test_attachments_bad_config(attachment_mbox, tmp_path):
    config = tmp_path / "extract.json"
    config.write_text(json.dumps({"extract": True, "unknown": 1}))

    runner = CliRunner()
    result = runner.invoke(cli, ["attachments", str(attachment_mbox), "-c", str(config)])
    assert result.exit_code != 0
    assert "Unknown extraction option" in result.output
