"""Top-level scrape: fetch, extract, convert."""

import logging

from fightdata.config import ParserConfig
from fightdata.fetch import fetch_document
from fightdata.ids import IdGenerator
from fightdata.models import FightRecord
from fightdata.parse_results import extract_candidates
from fightdata.process import FightProcessor

logger = logging.getLogger(__name__)


class FightParser:
    """Scrapes fight records from one results page."""

    def __init__(
        self,
        base_url: str,
        config: ParserConfig | None = None,
        id_generator: IdGenerator | None = None,
    ) -> None:
        self.base_url = base_url
        self.config = config or ParserConfig(base_url=base_url)
        self.processor = FightProcessor(
            id_generator=id_generator or IdGenerator(),
            buffer_size=self.config.buffer_size,
            item_timeout=self.config.item_timeout,
            collect_timeout=self.config.collect_timeout,
        )

    def parse_fights(self) -> list[FightRecord]:
        """Return the page's fight records in no particular order.

        Raises a ``FetchError`` subclass when the page cannot be fetched or
        parsed. An empty list means no fights were found (or none survived
        conversion).
        """
        logger.info("Starting parse of fight data from %s", self.base_url)
        soup = fetch_document(self.base_url, timeout=self.config.request_timeout)

        candidates = extract_candidates(soup)
        if not candidates:
            logger.info("No fight events found in the HTML document")
            return []

        logger.info("Found %d fight events, starting concurrent parsing", len(candidates))
        fights = self.processor.process_all(candidates)
        logger.info("Successfully parsed %d fights", len(fights))
        return fights


def parse_fights(url: str, config: ParserConfig | None = None) -> list[FightRecord]:
    return FightParser(url, config).parse_fights()
