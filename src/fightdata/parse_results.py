"""Results page HTML parser."""

import logging
from datetime import date

from bs4 import BeautifulSoup, Comment, Tag

from fightdata.models import FightCandidate
from fightdata.normalize import (
    UNKNOWN_LOCATION,
    clean_location,
    extract_fighter_name,
    parse_month_context,
)

logger = logging.getLogger(__name__)

# Cells of a fight row, in page order: day, boxer, result, boxer
_FIGHT_CELLS = ("date", "boxer_1", "vs", "boxer_2")


def extract_candidates(
    soup: BeautifulSoup,
    today: date | None = None,
) -> list[FightCandidate]:
    """Walk every table and return fight candidates in document order.

    A ``td.place`` row sets the location for the rows after it in the same
    table. A row with date, boxer_1, vs and boxer_2 cells is a fight and
    inherits that location. The month/year comes once from ``div.month``
    and applies to every fight on the page.
    """
    year, month = _month_context(soup, today)
    candidates: list[FightCandidate] = []

    for table_index, table in enumerate(soup.find_all("table")):
        location = UNKNOWN_LOCATION

        for tr in table.find_all("tr"):
            place = tr.find("td", class_="place")
            if place is not None:
                location = clean_location(_text_without_comments(place))
                logger.debug("Found location: %s", location)
                continue

            cells = _fight_cells(tr)
            if cells is None:
                continue
            date_cell, boxer1, vs, boxer2 = cells

            # Early gate: rows without both fighters never reach the workers
            fighter1 = extract_fighter_name(boxer1)
            fighter2 = extract_fighter_name(boxer2)
            if not fighter1 or not fighter2:
                logger.debug(
                    "Skipping row in table %d: fighter1=%r fighter2=%r",
                    table_index, fighter1, fighter2,
                )
                continue

            candidates.append(FightCandidate(
                location=location,
                day_token=date_cell.get_text().strip(),
                year=year, month=month,
                fighter1_cell=boxer1, fighter2_cell=boxer2,
                result_cell=vs, row=tr,
            ))
            logger.debug(
                "Extracted fight: %s vs %s on day %s in %s",
                fighter1, fighter2, candidates[-1].day_token, location,
            )

    logger.info(
        "Extracted %d fight candidates for %04d-%02d", len(candidates), year, month,
    )
    return candidates


def _month_context(soup: BeautifulSoup, today: date | None) -> tuple[int, int]:
    div = soup.find("div", class_="month")
    text = div.get_text().strip() if div is not None else ""
    if text:
        logger.info("Found month context: %s", text)
    return parse_month_context(text, today)


def _fight_cells(tr: Tag) -> tuple[Tag, Tag, Tag, Tag] | None:
    """Return the four fight cells of a row, or None if any is missing."""
    found = []
    for cls in _FIGHT_CELLS:
        cell = tr.find("td", class_=cls)
        if cell is None:
            return None
        found.append(cell)
    return found[0], found[1], found[2], found[3]


def _text_without_comments(tag: Tag) -> str:
    return "".join(
        s for s in tag.find_all(string=True) if not isinstance(s, Comment)
    )
