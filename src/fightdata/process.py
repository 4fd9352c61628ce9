"""Concurrent conversion of fight candidates into records."""

import logging
import queue
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from datetime import datetime

from fightdata.ids import IdGenerator
from fightdata.models import FightCandidate, FightRecord, ProcessingOutcome
from fightdata.normalize import extract_fighter_name, extract_result, format_date
from fightdata.util import CandidateConversionError, PanicRecoveryError

logger = logging.getLogger(__name__)

BUFFER_SIZE = 100
ITEM_TIMEOUT = 10.0  # seconds, per result while draining
COLLECT_TIMEOUT = 5.0  # seconds, for the collector once all workers are done


class FightProcessor:
    """Fans candidates out to one worker each and collects the records.

    Workers push one ``ProcessingOutcome`` each into a bounded queue that a
    collector thread drains at the same time. The collector gives up after
    ``item_timeout`` without a result; once every worker has finished the
    collector gets another ``collect_timeout`` before whatever it gathered
    is returned. Failed candidates are logged and dropped, so the result can
    be shorter than the input. Result order is arbitrary.
    """

    def __init__(
        self,
        id_generator: IdGenerator | None = None,
        buffer_size: int = BUFFER_SIZE,
        item_timeout: float = ITEM_TIMEOUT,
        collect_timeout: float = COLLECT_TIMEOUT,
    ) -> None:
        self.id_generator = id_generator or IdGenerator()
        self.buffer_size = buffer_size
        self.item_timeout = item_timeout
        self.collect_timeout = collect_timeout

    def process_all(self, candidates: list[FightCandidate]) -> list[FightRecord]:
        if not candidates:
            return []

        outcomes: queue.Queue[ProcessingOutcome] = queue.Queue(maxsize=self.buffer_size)
        records: list[FightRecord] = []
        collector = threading.Thread(
            target=self._collect,
            args=(outcomes, len(candidates), records),
            name="fight-collector",
            daemon=True,
        )
        collector.start()

        with ThreadPoolExecutor(
            max_workers=len(candidates), thread_name_prefix="fight",
        ) as pool:
            futures = [
                pool.submit(self._process_one, i, c, outcomes)
                for i, c in enumerate(candidates)
            ]
            wait(futures)

        collector.join(self.collect_timeout)
        if collector.is_alive():
            logger.warning("Timeout waiting for result collection")

        logger.info(
            "Processed %d candidates into %d records", len(candidates), len(records),
        )
        return list(records)

    def convert(self, candidate: FightCandidate) -> FightRecord:
        fighter1 = extract_fighter_name(candidate.fighter1_cell)
        fighter2 = extract_fighter_name(candidate.fighter2_cell)
        if not fighter1 or not fighter2:
            raise CandidateConversionError(
                f"missing essential fight data: fighter1={fighter1!r}, fighter2={fighter2!r}"
            )

        return FightRecord(
            id=self.id_generator.next_id(),
            date=format_date(candidate.day_token, candidate.year, candidate.month),
            fighter1=fighter1,
            fighter2=fighter2,
            result=extract_result(candidate.result_cell),
            location=candidate.location,
            parsed_at=datetime.now().astimezone().isoformat(timespec="seconds"),
        )

    def _process_one(
        self,
        index: int,
        candidate: FightCandidate,
        outcomes: "queue.Queue[ProcessingOutcome]",
    ) -> None:
        try:
            outcome = ProcessingOutcome(index, record=self.convert(candidate))
        except CandidateConversionError as e:
            outcome = ProcessingOutcome(index, error=e)
        except Exception as e:
            logger.error("Unexpected error converting fight %d: %s", index, e, exc_info=True)
            error = PanicRecoveryError(f"unexpected error during parsing: {e}")
            error.__cause__ = e
            outcome = ProcessingOutcome(index, error=error)

        try:
            outcomes.put(outcome, timeout=self.item_timeout)
        except queue.Full:
            # Collector has stopped listening; nobody will read this one
            logger.warning("Dropped result for fight %d, result queue full", index)

    def _collect(
        self,
        outcomes: "queue.Queue[ProcessingOutcome]",
        expected: int,
        records: list[FightRecord],
    ) -> None:
        for i in range(expected):
            try:
                outcome = outcomes.get(timeout=self.item_timeout)
            except queue.Empty:
                logger.warning(
                    "Timeout waiting for fight result %d of %d, stopping collection",
                    i + 1, expected,
                )
                return
            if outcome.error is not None:
                logger.warning("Error parsing fight %d: %s", outcome.index, outcome.error)
                continue
            if outcome.record is not None:
                records.append(outcome.record)
