"""Text normalization for cells of the results page.

Every function here is total: malformed input degrades to a sentinel value
instead of raising, so one bad cell never costs a whole record.
"""

import logging
import re
from datetime import date, timedelta

from bs4 import Tag

logger = logging.getLogger(__name__)

UNKNOWN_LOCATION = "Unknown Location"
UNKNOWN_FIGHTER = "Unknown Fighter"
UNKNOWN_RESULT = "TBD"

_COMMENT_PATTERN = re.compile(r"<!--.*?-->", re.DOTALL)
_COMMENT_MARKERS = re.compile(r"<!--|-->")
_WHITESPACE = re.compile(r"\s+")
_YEAR_PATTERN = re.compile(r"\b(19\d{2}|20\d{2})\b")
_WORD_PATTERN = re.compile(r"[^\W\d_]+")

_ENGLISH_MONTHS = {
    "january": 1, "february": 2, "march": 3, "april": 4,
    "may": 5, "june": 6, "july": 7, "august": 8,
    "september": 9, "october": 10, "november": 11, "december": 12,
}

# Stems cover nominative and genitive forms ("октябрь", "октября")
_RUSSIAN_MONTH_STEMS = [
    ("январ", 1), ("феврал", 2), ("март", 3), ("апрел", 4),
    ("июн", 6), ("июл", 7), ("август", 8), ("сентябр", 9),
    ("октябр", 10), ("ноябр", 11), ("декабр", 12),
]
_RUSSIAN_MAY = {"май", "мая"}


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def clean_location(text: str) -> str:
    """Strip comments and extra whitespace from a place cell's text."""
    cleaned = _COMMENT_PATTERN.sub("", text)
    cleaned = _COMMENT_MARKERS.sub("", cleaned)
    cleaned = collapse_whitespace(cleaned)
    return cleaned or UNKNOWN_LOCATION


def extract_fighter_name(cell: Tag) -> str:
    """Extract a fighter name from a boxer cell.

    The link text wins when present. Otherwise the first line of the cell
    text is used, cut before the record annotation, e.g. "(7-0, 6 KO)".
    An empty cell gives "" so the row fails the two-fighter check; a cell
    holding only an annotation gives "Unknown Fighter".
    """
    link = cell.find("a")
    if link is not None:
        link_text = link.get_text().strip()
        if link_text:
            return link_text

    full_text = cell.get_text().strip()
    if not full_text:
        return ""

    name = full_text.split("\n")[0].strip()
    paren = name.find("(")
    if paren != -1:
        name = name[:paren].strip()
    return name or UNKNOWN_FIGHTER


def extract_result(cell: Tag) -> str:
    return collapse_whitespace(cell.get_text()) or UNKNOWN_RESULT


def format_date(
    day_token: str,
    year: int,
    month: int,
    today: date | None = None,
) -> str:
    """Turn a bare day of month into YYYY-MM-DD for the given month.

    Days outside the month roll into the neighbouring month. A token that
    is not a number, or lands outside the calendar, falls back to today's
    date; this hides missing dates.
    """
    try:
        day = int(day_token.strip())
    except ValueError:
        logger.warning("Error parsing day number %r, using current date", day_token)
        return (today or date.today()).isoformat()

    first = date(year, month, 1)
    try:
        return (first + timedelta(days=day - 1)).isoformat()
    except OverflowError:
        logger.warning("Day number %r out of range, using current date", day_token)
        return (today or date.today()).isoformat()


def parse_month_context(text: str, today: date | None = None) -> tuple[int, int]:
    """Derive (year, month) from the page's month heading.

    Understands English and Russian month names and an optional 4-digit
    year. Whatever is missing comes from today's date.
    """
    today = today or date.today()
    year, month = today.year, today.month

    m = _YEAR_PATTERN.search(text)
    if m:
        year = int(m.group(1))

    for word in _WORD_PATTERN.findall(text.lower()):
        found = _month_from_word(word)
        if found:
            month = found
            break
    else:
        if text.strip():
            logger.debug("No month name in %r, using current month", text)

    return year, month


def _month_from_word(word: str) -> int | None:
    if word in _ENGLISH_MONTHS:
        return _ENGLISH_MONTHS[word]
    if word in _RUSSIAN_MAY:
        return 5
    for stem, number in _RUSSIAN_MONTH_STEMS:
        if word.startswith(stem):
            return number
    return None
