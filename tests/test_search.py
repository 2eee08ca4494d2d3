import logging

import pytest

from reorgcalc.config import HASHES_PER_DIFFICULTY
from reorgcalc.errors import InvalidParameter
from reorgcalc.search import candidate_heights, find_viable_heights, search_viable
from .mock_source import MockBlockSource

# at difficulty 1, one block every 10 minutes: a reorg of depth d takes (d + 1) * 600 seconds
HASHRATE = 2 ** 32 / 600


def test_candidate_heights():
    assert candidate_heights(10000) == [9999, 9990, 9950, 9900, 9500, 9000, 5000]
    assert candidate_heights(1000) == [999, 990, 950, 900, 500]
    assert candidate_heights(50) == [49, 40]
    assert candidate_heights(1) == []
    assert candidate_heights(0) == []


def test_filter_by_days():
    source = MockBlockSource(1000, 1.0)
    assert find_viable_heights(source, HASHRATE, 1.0) == [999, 990, 950, 900]
    assert find_viable_heights(source, HASHRATE, 10.0) == [999, 990, 950, 900, 500]
    assert find_viable_heights(source, HASHRATE, 0.05) == [999]


def test_zero_days():
    assert find_viable_heights(MockBlockSource(1000, 1.0), HASHRATE, 0) == []


def test_monotonic_inclusion():
    source = MockBlockSource(10000, 1.0)
    previous = []
    for max_days in [0, 0.01, 0.05, 0.1, 0.5, 1, 5, 50, 500]:
        heights = find_viable_heights(source, HASHRATE, max_days)
        assert set(previous) <= set(heights)
        assert heights == [h for h in candidate_heights(10000) if h in heights]
        previous = heights
    assert previous == candidate_heights(10000)


def test_search_returns_calculations():
    calcs = search_viable(MockBlockSource(1000, 1.0), HASHRATE, 1.0, target_days=2.0)
    assert [c.fork_height for c in calcs] == [999, 990, 950, 900]
    assert [c.blocks_needed for c in calcs] == [2, 11, 51, 101]
    assert all(c.target_days == 2.0 for c in calcs)


def test_failed_candidates_are_skipped(caplog):
    source = MockBlockSource(1000, 1.0, missing=[960])
    with caplog.at_level(logging.WARNING):
        heights = find_viable_heights(source, HASHRATE, 10.0)
    assert heights == [999, 990]
    warned = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warned) == 3
    assert "Failed to calculate for height 950" in warned[0]


def test_no_candidate_available():
    source = MockBlockSource(1000, 1.0, missing=[1000])
    assert find_viable_heights(source, HASHRATE, 10.0) == []


def test_invalid_parameters():
    source = MockBlockSource(1000, 1.0)
    with pytest.raises(InvalidParameter):
        find_viable_heights(source, 0, 1.0)
    with pytest.raises(InvalidParameter):
        find_viable_heights(source, HASHRATE, -1.0)
    with pytest.raises(InvalidParameter):
        find_viable_heights(source, HASHRATE, 10.0, target_days=0)
    with pytest.raises(InvalidParameter):
        find_viable_heights(source, HASHRATE, 10.0, target_days=-3.0)
    with pytest.raises(InvalidParameter):
        find_viable_heights(source, HASHRATE, 10.0, hashes_per_difficulty=0)
    assert source.lookups == []


def test_huge_target_skips_candidates(caplog):
    source = MockBlockSource(1000, 1.0, overrides={995: 0xff7fffff})
    with caplog.at_level(logging.WARNING):
        heights = find_viable_heights(source, HASHRATE, 10.0)
    assert heights == [999]
    warned = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warned) == 4


def test_hashes_per_difficulty():
    source = MockBlockSource(1000, 1.0)
    # each block now takes 20 minutes, so depth 100 needs 1.4 days
    doubled = 2 * HASHES_PER_DIFFICULTY
    assert find_viable_heights(source, HASHRATE, 1.0, hashes_per_difficulty=doubled) == [999, 990, 950]
    calcs = search_viable(source, HASHRATE, 1.0, hashes_per_difficulty=doubled)
    assert calcs[-1].time_required_days == pytest.approx(51 * 1200 / 86400)
