"""Tests for fightdata.ids."""

import re
from concurrent.futures import ThreadPoolExecutor

from fightdata.ids import IdGenerator

_ID_PATTERN = re.compile(r"^fight_(\d+)_(\d+)$")


class TestIdGenerator:
    def test_format(self) -> None:
        assert _ID_PATTERN.match(IdGenerator().next_id())

    def test_counter_increments(self) -> None:
        gen = IdGenerator()
        counters = [int(_ID_PATTERN.match(gen.next_id()).group(2)) for _ in range(3)]
        assert counters == [1, 2, 3]

    def test_timestamp_fixed_per_instance(self) -> None:
        gen = IdGenerator()
        prefixes = {_ID_PATTERN.match(gen.next_id()).group(1) for _ in range(5)}
        assert len(prefixes) == 1

    def test_unique_under_concurrency(self) -> None:
        gen = IdGenerator()
        per_worker, workers = 250, 8

        def burst() -> list[str]:
            return [gen.next_id() for _ in range(per_worker)]

        with ThreadPoolExecutor(max_workers=workers) as pool:
            ids = [i for batch in pool.map(lambda _: burst(), range(workers)) for i in batch]

        assert len(ids) == per_worker * workers
        assert len(set(ids)) == len(ids)
