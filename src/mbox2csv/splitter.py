"""Split an MBOX byte stream into raw message blocks."""

from __future__ import annotations

from typing import BinaryIO, Iterable, Iterator

from .constants import ENVELOPE_PREFIX


def iter_blocks(stream: BinaryIO | Iterable[bytes]) -> Iterator[bytes]:
    """Yield one raw block per message, envelope line included.

    A block starts at every line beginning with ``From `` (the first one
    too) and runs up to the next such line. Lines are kept byte-for-byte,
    line endings included. Empty blocks are never yielded.
    """
    buffer: list[bytes] = []

    for line in stream:
        if line.startswith(ENVELOPE_PREFIX) and buffer:
            yield b"".join(buffer)
            buffer = []
        buffer.append(line)

    if buffer:
        yield b"".join(buffer)
