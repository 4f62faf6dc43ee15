"""
Tests of the compaction of exchanger lists.
"""

import pytest

from henslib.common import Exchanger
from henslib.compactor import compact_exchangers


class TestCompactExchangers:
    def test_merges_duplicates(self):
        result = compact_exchangers([Exchanger(0, 1, 1.0), Exchanger(0, 1, 2.0)])
        assert result == [Exchanger(0, 1, pytest.approx(3.0))]

    def test_missing_ends_sort_last(self):
        result = compact_exchangers(
            [
                Exchanger(None, 0, 1.0),
                Exchanger(0, None, 1.0),
                Exchanger(1, 0, 1.0),
                Exchanger(0, 0, 1.0),
            ]
        )
        assert [(ex.hot, ex.cold) for ex in result] == [
            (0, 0),
            (0, None),
            (1, 0),
            (None, 0),
        ]

    def test_drops_negligible_loads(self):
        assert compact_exchangers([Exchanger(0, 0, 1e-9), Exchanger(0, 1, 0.0)]) == []

    def test_empty(self):
        assert compact_exchangers([]) == []

    def test_accepts_iterators(self):
        result = compact_exchangers(Exchanger(0, 0, q) for q in (1.0, 2.0, 3.0))
        assert result == [Exchanger(0, 0, pytest.approx(6.0))]

    def test_input_is_not_modified(self):
        exchangers = [Exchanger(1, 0, 1.0), Exchanger(0, 0, 2.0), Exchanger(1, 0, 3.0)]
        snapshot = list(exchangers)
        compact_exchangers(exchangers)
        assert exchangers == snapshot

    def test_idempotent(self):
        once = compact_exchangers(
            [Exchanger(1, None, 0.5), Exchanger(0, 1, 1.5), Exchanger(1, None, 0.25)]
        )
        assert compact_exchangers(once) == once
        assert len(once) == 2


class TestExchanger:
    @pytest.mark.parametrize(
        "exchanger,kind",
        [
            (Exchanger(0, 1, 1.0), "cell"),
            (Exchanger(None, 1, 1.0), "heater"),
            (Exchanger(0, None, 1.0), "cooler"),
            (Exchanger(None, None, 1.0), "invalid"),
        ],
    )
    def test_kind(self, exchanger, kind):
        assert exchanger.kind == kind
        assert exchanger.is_utility == (kind in ("heater", "cooler"))


if __name__ == "__main__":
    pytest.main([__file__])
