"""Constants for mbox2csv."""

from pathlib import Path

# --- Encoding ---
OUTPUT_ENCODING = "utf-8"
PLACEHOLDER = "?"  # replaces undecodable / unencodable characters

# --- MBOX ---
ENVELOPE_PREFIX = b"From "

# --- Default output paths ---
DEFAULT_EMAILS_CSV = Path("emails.csv")
DEFAULT_SENDER_STATS_CSV = Path("email_statistics.csv")
DEFAULT_RECIPIENT_STATS_CSV = Path("recipient_statistics.csv")
DEFAULT_ATTACHMENTS_DIR = Path("attachments")

# --- CSV headers ---
EMAIL_HEADER = ["From", "To", "Subject", "Date", "Body"]
SENDER_STATS_HEADER = ["Sender", "Email Count", "Average Body Length (chars)"]
RECIPIENT_STATS_HEADER = ["Recipient", "Email Count"]

# --- Attachments ---
UNKNOWN_DATE = "unknown_date"
UNKNOWN_TIME = "unknown_time"
DEFAULT_ATTACHMENT_BASE = "attachment"
FALLBACK_EXTENSION = "bin"

MIME_EXTENSIONS = {
    "application/pdf": "pdf",
    "application/zip": "zip",
    "application/x-zip-compressed": "zip",
    "application/gzip": "gz",
    "application/json": "json",
    "application/xml": "xml",
    "application/rtf": "rtf",
    "application/msword": "doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
    "application/vnd.ms-excel": "xls",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": "xlsx",
    "application/vnd.ms-powerpoint": "ppt",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation": "pptx",
    "application/vnd.oasis.opendocument.text": "odt",
    "application/vnd.oasis.opendocument.spreadsheet": "ods",
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/gif": "gif",
    "image/bmp": "bmp",
    "image/tiff": "tif",
    "image/webp": "webp",
    "image/svg+xml": "svg",
    "text/plain": "txt",
    "text/html": "html",
    "text/csv": "csv",
    "text/calendar": "ics",
    "audio/mpeg": "mp3",
    "audio/wav": "wav",
    "video/mp4": "mp4",
    "message/rfc822": "eml",
}

# --- Extraction config keys ---
EXTRACTION_OPTIONS = ("extract", "filetypes", "output_folder")

# --- Display ---
STATS_DISPLAY_LIMIT = 20
