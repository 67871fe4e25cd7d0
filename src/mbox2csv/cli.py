"""CLI entry point for mbox2csv."""

from __future__ import annotations

from pathlib import Path

import click

from . import __version__
from .config import ExtractionConfig, load_extraction_config, parse_filetypes
from .constants import (
    DEFAULT_ATTACHMENTS_DIR,
    DEFAULT_EMAILS_CSV,
    DEFAULT_RECIPIENT_STATS_CSV,
    DEFAULT_SENDER_STATS_CSV,
)
from .display import (
    console,
    create_progress,
    display_extraction_summary,
    display_parse_summary,
    display_recipient_stats,
    display_sender_stats,
    setup_logging,
)
from .errors import ConfigError, ExtractionUsageError
from .pipeline import extract_attachments, parse_mbox

_MBOX_ARG = click.Path(exists=True, dir_okay=False, path_type=Path)
_OUT_PATH = click.Path(dir_okay=False, path_type=Path)
_DIR_PATH = click.Path(file_okay=False, path_type=Path)


@click.group()
@click.version_option(version=__version__, prog_name="mbox2csv")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """mbox2csv - export MBOX archives to CSV with sender statistics."""
    setup_logging(verbose)


@cli.command()
@click.argument("mbox_file", type=_MBOX_ARG)
@click.option("-o", "--output", type=_OUT_PATH, default=DEFAULT_EMAILS_CSV, show_default=True,
              help="CSV file for all messages.")
@click.option("--sender-stats", type=_OUT_PATH, default=DEFAULT_SENDER_STATS_CSV,
              show_default=True, help="CSV file for sender statistics.")
@click.option("--recipient-stats", type=_OUT_PATH, default=DEFAULT_RECIPIENT_STATS_CSV,
              show_default=True, help="CSV file for recipient statistics.")
@click.option("--per-sender-dir", type=_DIR_PATH, default=None,
              help="Also write one CSV per sender into this directory.")
@click.option("--extract-filetypes", default=None,
              help="Also save attachments of these types (e.g. 'pdf,png').")
@click.option("--attachments-dir", type=_DIR_PATH, default=DEFAULT_ATTACHMENTS_DIR,
              show_default=True, help="Where to save extracted attachments.")
def parse(
    mbox_file: Path,
    output: Path,
    sender_stats: Path,
    recipient_stats: Path,
    per_sender_dir: Path | None,
    extract_filetypes: str | None,
    attachments_dir: Path,
) -> None:
    """Parse an MBOX file into CSV exports and statistics."""
    extraction = None
    if extract_filetypes is not None:
        extraction = ExtractionConfig(
            extract=True,
            filetypes=parse_filetypes(extract_filetypes),
            output_folder=attachments_dir,
        )

    try:
        with create_progress("Parsing messages") as progress:
            task = progress.add_task("parsing", total=None)

            def on_block(done: int, total: int) -> None:
                progress.update(task, completed=done, total=total)

            result = parse_mbox(
                mbox_file,
                output,
                sender_stats,
                recipient_stats,
                per_sender_dir=per_sender_dir,
                extraction=extraction,
                callback=on_block,
            )
    except ExtractionUsageError as e:
        raise click.UsageError(str(e)) from e
    except OSError as e:
        raise click.ClickException(f"Error processing MBOX file: {e}") from e

    display_parse_summary(result)
    display_sender_stats(result.sender_stats)
    display_recipient_stats(result.recipient_stats)


@cli.command()
@click.argument("mbox_file", type=_MBOX_ARG)
@click.option("-t", "--filetypes", default=None,
              help="Comma-separated file types to keep (e.g. 'pdf,docx').")
@click.option("-o", "--output-folder", type=_DIR_PATH, default=None,
              help=f"Destination directory (default: {DEFAULT_ATTACHMENTS_DIR}).")
@click.option("-c", "--config", "config_file", type=click.Path(exists=True, dir_okay=False,
              path_type=Path), default=None,
              help="JSON file with extract / filetypes / output_folder options.")
def attachments(
    mbox_file: Path,
    filetypes: str | None,
    output_folder: Path | None,
    config_file: Path | None,
) -> None:
    """Extract attachments of the given file types from an MBOX file."""
    try:
        if config_file is not None:
            config = load_extraction_config(config_file)
        else:
            config = ExtractionConfig(extract=True)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    # Command-line options win over the config file
    options = {
        "extract": config.extract,
        "filetypes": parse_filetypes(filetypes) if filetypes is not None else config.filetypes,
        "output_folder": output_folder or config.output_folder,
    }
    config = ExtractionConfig.from_mapping(options)

    try:
        with create_progress("Extracting attachments") as progress:
            task = progress.add_task("extracting", total=None)

            def on_block(done: int, total: int) -> None:
                progress.update(task, completed=done, total=total)

            result = extract_attachments(mbox_file, config, callback=on_block)
    except ExtractionUsageError as e:
        raise click.UsageError(str(e)) from e
    except OSError as e:
        raise click.ClickException(f"Error processing MBOX file: {e}") from e

    if not config.extract:
        console.print("[yellow]Extraction is disabled in the configuration.[/yellow]")
        return

    display_extraction_summary(result)
