"""Thread safety tests for concurrent parsing.

Parsers share the immutable rule table and read configuration from a
ContextVar, so concurrent parses with different configs must not interfere.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed

import pytest

from spoonmark import (
    ParseConfig,
    RecursionLimitExceeded,
    extract_outline,
    get_parse_config,
    parse,
    to_json,
)

DOCS = [
    f"# Doc {i}\n\n## Part {i}\n\n- item {i}\n  - sub {i}\n\n> quote *{i}*\n\n%% GET /d/{{id{i}}}"
    for i in range(20)
]


class TestConcurrentParsing:
    def test_results_match_sequential(self) -> None:
        expected = [to_json(parse(doc)) for doc in DOCS]

        def work(doc: str) -> str:
            return to_json(parse(doc))

        with ThreadPoolExecutor(max_workers=8) as executor:
            futures = {executor.submit(work, doc): i for i, doc in enumerate(DOCS)}
            results = {futures[future]: future.result() for future in as_completed(futures)}

        assert [results[i] for i in range(len(DOCS))] == expected

    def test_no_config_bleeding_between_threads(self) -> None:
        """Strict and lenient depth limits run side by side."""
        source = "> > > x"

        def run(max_depth: int) -> str:
            try:
                parse(source, config=ParseConfig(max_depth=max_depth))
            except RecursionLimitExceeded:
                return "limited"
            return "ok"

        depths = [1, 64] * 25
        with ThreadPoolExecutor(max_workers=10) as executor:
            outcomes = list(executor.map(run, depths))

        assert outcomes == ["limited" if depth == 1 else "ok" for depth in depths]
        assert get_parse_config().max_depth == 64

    @pytest.mark.parametrize("workers", [2, 8])
    def test_concurrent_outline(self, workers: int) -> None:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            outlines = list(executor.map(lambda d: extract_outline(parse(d)), DOCS))

        assert [outline.title for outline in outlines] == [f"Doc {i}" for i in range(20)]
        assert [outline.parts[0].id for outline in outlines] == [f"part-{i}" for i in range(20)]
