"""Exceptions raised by mbox2csv."""


class Mbox2CsvError(Exception):
    """Base class for all mbox2csv errors."""


class MessageDecodeError(Mbox2CsvError):
    """A single message block could not be decoded.

    Block-level and recoverable: the pipeline logs it and moves on to the
    next block.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class ExtractionUsageError(Mbox2CsvError, ValueError):
    """Attachment extraction was requested without any file types."""


class ConfigError(Mbox2CsvError):
    """An extraction configuration could not be read or has unknown options."""
