# textshare/constants.py
# Shared constants for links, history and user notifications

HISTORY_STORAGE_KEY: str = "textshare_history"
HISTORY_CAPACITY: int = 5
# history ids are epoch milliseconds; last millisecond of year 9999
MAX_ENTRY_ID: int = 253_402_300_799_999

PREVIEW_LENGTH: int = 30
PREVIEW_ELLIPSIS: str = "..."

WORDS_PER_MINUTE: int = 225

# token alphabet of the link fragment
TOKEN_PATTERN: str = r"[A-Za-z0-9_-]*"

# user-facing notification texts
MSG_EMPTY_INPUT: str = "Please enter some text first!"
MSG_LINK_GENERATED: str = "Link generated successfully!"
MSG_INVALID_LINK: str = "Invalid or corrupted link"
MSG_ENCODE_FAILED: str = "This text cannot be turned into a link"
MSG_COPY_FAILED: str = "Failed to copy"
MSG_COPIED: str = "{label} copied to clipboard!"
