# tests/unit/test_text_stats.py

from textshare.utils.links import build_link, build_qr_url, fragment_of, strip_hash
from textshare.utils.text_stats import (
    calculate_stats,
    count_chars,
    count_words,
    format_reading_time,
    reading_time_minutes,
)


def test_count_words_ignores_surrounding_whitespace():
    assert count_words("  one two\n\tthree  ") == 3
    assert count_words("") == 0
    assert count_words("   \n ") == 0


def test_count_chars_counts_code_points():
    assert count_chars("世界") == 2
    assert count_chars("") == 0


def test_reading_time_rounds_up():
    assert reading_time_minutes("word " * 225) == 1
    assert reading_time_minutes("word " * 226) == 2
    assert format_reading_time("") == "1 min read"


def test_calculate_stats():
    assert calculate_stats("Hello, 世界! 🎉") == {
        "chars": 12,
        "words": 3,
        "reading_time": "1 min read",
    }


def test_build_link():
    assert build_link("https://x.test", "/app", "SGk") == "https://x.test/app#SGk"
    assert build_link("https://x.test/", "app", "SGk") == "https://x.test/app#SGk"
    assert build_link("https://x.test", "/", "") == "https://x.test/#"


def test_fragment_of():
    assert fragment_of("https://x.test/app#SGk") == "SGk"
    assert fragment_of("https://x.test/app#%%%invalid") == "%%%invalid"
    assert fragment_of("https://x.test/app") == ""


def test_strip_hash():
    assert strip_hash("#SGk") == "SGk"
    assert strip_hash("SGk") == "SGk"


def test_build_qr_url_percent_encodes_the_link():
    url = build_qr_url("https://qr.test/create/", "https://x.test/app#SGk", size=150)
    assert url == (
        "https://qr.test/create/?size=150x150"
        "&data=https%3A%2F%2Fx.test%2Fapp%23SGk&color=000000"
    )
