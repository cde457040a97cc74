# textshare/utils/text_stats.py
# Editor statistics shown next to the text: characters, words, reading time

import math
from typing import Dict, Union

from textshare.constants import WORDS_PER_MINUTE


def count_chars(text: str) -> int:
    """Number of characters (code points) in text."""
    return len(text)


def count_words(text: str) -> int:
    """Whitespace-separated words; blank text has none."""
    stripped = text.strip()
    if not stripped:
        return 0
    return len(stripped.split())


def reading_time_minutes(text: str, wpm: int = WORDS_PER_MINUTE) -> int:
    """
    Estimated reading time in whole minutes, rounded up.
    Blank text still counts as one word, so the estimate never drops below 1.
    """
    words = max(count_words(text), 1)
    return math.ceil(words / wpm)


def format_reading_time(text: str, wpm: int = WORDS_PER_MINUTE) -> str:
    return f"{reading_time_minutes(text, wpm)} min read"


def calculate_stats(text: str) -> Dict[str, Union[int, str]]:
    """Return the stats overlay values for text."""
    return {
        "chars": count_chars(text),
        "words": count_words(text),
        "reading_time": format_reading_time(text),
    }
