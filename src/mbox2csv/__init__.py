"""mbox2csv - export MBOX archives to CSV with sender and recipient statistics."""

__version__ = "0.1.0"
