"""Rich-based display functions for mbox2csv."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from .constants import STATS_DISPLAY_LIMIT
from .models import ExtractionResult, ParseResult, RecipientStatRecord, SenderStatRecord

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Route mbox2csv log records through Rich onto the shared console."""
    logger = logging.getLogger("mbox2csv")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=console, show_path=False))


def create_progress(description: str) -> Progress:
    """Create a Rich Progress bar that counts bytes of the archive."""
    return Progress(
        SpinnerColumn(),
        TextColumn(f"[bold blue]{description}"),
        BarColumn(),
        DownloadColumn(),
        TimeElapsedColumn(),
        console=console,
    )


def display_sender_stats(records: list[SenderStatRecord], limit: int = STATS_DISPLAY_LIMIT) -> None:
    table = Table(title="Sender Statistics")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Sender")
    table.add_column("Emails", justify="right")
    table.add_column("Avg body length (chars)", justify="right")

    for idx, record in enumerate(records[:limit], start=1):
        table.add_row(
            str(idx),
            record.sender,
            str(record.email_count),
            f"{record.average_body_length_chars:.2f}",
        )

    console.print(table)
    if len(records) > limit:
        console.print(f"[dim]... and {len(records) - limit} more senders[/dim]")


def display_recipient_stats(
    records: list[RecipientStatRecord], limit: int = STATS_DISPLAY_LIMIT
) -> None:
    table = Table(title="Recipient Statistics")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Recipient")
    table.add_column("Emails", justify="right")

    for idx, record in enumerate(records[:limit], start=1):
        table.add_row(str(idx), record.recipient, str(record.email_count))

    console.print(table)
    if len(records) > limit:
        console.print(f"[dim]... and {len(records) - limit} more recipients[/dim]")


def display_parse_summary(result: ParseResult) -> None:
    """Display where a parse run wrote its output and how many rows."""
    lines = [
        f"[bold]Messages written:[/bold] {result.messages_written}",
        f"[bold]Blocks skipped:[/bold] {result.blocks_skipped} of {result.blocks_seen}",
        f"[bold]Emails:[/bold] {result.output_csv}",
        f"[bold]Sender statistics:[/bold] {result.sender_stats_csv}",
        f"[bold]Recipient statistics:[/bold] {result.recipient_stats_csv}",
    ]
    if result.per_sender_dir is not None:
        lines.append(f"[bold]Per-sender exports:[/bold] {result.per_sender_dir}")
        if result.per_sender_failures:
            lines.append(
                f"[yellow]Per-sender writes failed: {result.per_sender_failures}[/yellow]"
            )
    if result.attachments_written:
        lines.append(f"[bold]Attachments saved:[/bold] {result.attachments_written}")

    console.print(Panel("\n".join(lines), title="Parsing completed"))


def display_extraction_summary(result: ExtractionResult) -> None:
    console.print(
        Panel(
            f"[bold green]Saved {result.files_written} attachment(s) "
            f"to {result.output_folder}.[/bold green]\n"
            f"Blocks skipped: {result.blocks_skipped} of {result.blocks_seen}",
            title="Done",
        )
    )
