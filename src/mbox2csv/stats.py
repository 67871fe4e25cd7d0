"""Sender and recipient statistics."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from .models import RecipientStatRecord, SenderStatRecord


def round_half_up(value: float, places: int = 2) -> float:
    """Round ``value`` half away from zero at ``places`` decimals."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def has_sender(sender: str | None) -> bool:
    """True unless the sender is empty or only whitespace."""
    return bool(sender and sender.strip())


class StatisticsAggregator:
    """Accumulates per-sender and per-recipient counts over one run.

    Dicts keep insertion order, so sorting by count alone leaves ties in
    first-seen order.
    """

    def __init__(self) -> None:
        self.sender_counts: dict[str, int] = {}
        self.body_lengths: dict[str, list[int]] = {}
        self.recipient_counts: dict[str, int] = {}

    def record(self, sender: str, recipients: Iterable[str], body_length_chars: int) -> None:
        """Record one message.

        An empty sender is left out of the sender statistics; its recipients
        are still counted. Every recipient occurrence counts, duplicates
        included.
        """
        if has_sender(sender):
            self.sender_counts[sender] = self.sender_counts.get(sender, 0) + 1
            self.body_lengths.setdefault(sender, []).append(body_length_chars)

        for recipient in recipients:
            if not recipient:
                continue
            self.recipient_counts[recipient] = self.recipient_counts.get(recipient, 0) + 1

    def finalize_sender_report(self) -> list[SenderStatRecord]:
        records = []
        for sender, count in sorted(self.sender_counts.items(), key=lambda kv: -kv[1]):
            lengths = self.body_lengths[sender]
            average = sum(lengths) / len(lengths)
            records.append(
                SenderStatRecord(
                    sender=sender,
                    email_count=count,
                    average_body_length_chars=round_half_up(average),
                )
            )
        return records

    def finalize_recipient_report(self) -> list[RecipientStatRecord]:
        return [
            RecipientStatRecord(recipient=recipient, email_count=count)
            for recipient, count in sorted(self.recipient_counts.items(), key=lambda kv: -kv[1])
        ]
