from datetime import datetime, timezone

import pytest

from reorgcalc.calculator import evaluate
from reorgcalc.config import HASHES_PER_DIFFICULTY
from reorgcalc.errors import DataUnavailable, InvalidForkHeight, InvalidParameter
from .mock_source import MockBlockSource, DIFFICULTY_2_BITS

ONE_BLOCK_PER_10_MIN_AT_DIFFICULTY_2 = 2 ** 32 * 2.0 / 600


def test_scenario():
    source = MockBlockSource(1000, 2.0, bits=DIFFICULTY_2_BITS)
    before = datetime.now(timezone.utc)
    calc = evaluate(source, 990, ONE_BLOCK_PER_10_MIN_AT_DIFFICULTY_2, 3.0)

    assert calc.fork_height == 990
    assert calc.current_height == 1000
    assert calc.blocks_to_reorg == 11
    assert calc.total_work == 22.0
    assert calc.current_difficulty == 2.0
    assert calc.blocks_needed == 11
    assert calc.time_required_hours == pytest.approx(6600 / 3600)
    assert calc.time_required_days == pytest.approx(0.0763888, rel=1e-5)
    assert calc.hashrate_required == pytest.approx(11 * 2.0 * 2 ** 32 / (3 * 86400))
    assert calc.target_days == 3.0
    assert before <= calc.timestamp <= datetime.now(timezone.utc)


def test_ceiling():
    source = MockBlockSource(50, 3.0)
    calc = evaluate(source, 41, 1e12, 3.0)
    assert calc.total_work == 10.0
    assert calc.blocks_needed == 4


def test_exact_division_is_not_rounded_up():
    source = MockBlockSource(50, 2.0)
    assert evaluate(source, 41, 1e12, 3.0).blocks_needed == 5


def test_single_block_suffices():
    source = MockBlockSource(50, 1000.0)
    calc = evaluate(source, 45, 1e12, 3.0)
    assert calc.blocks_needed == 1
    assert calc.single_block_suffices
    assert not evaluate(MockBlockSource(50, 1.0), 45, 1e12, 3.0).single_block_suffices


def test_fork_at_tip():
    calc = evaluate(MockBlockSource(50, 1.0), 50, 1e12, 3.0)
    assert calc.blocks_to_reorg == 1
    assert calc.blocks_needed == 1


def test_fork_above_tip():
    with pytest.raises(InvalidForkHeight) as e:
        evaluate(MockBlockSource(50, 1.0), 51, 1e12, 3.0)
    assert e.value.fork_height == 51
    assert e.value.current_height == 50


@pytest.mark.parametrize("hashrate,target_days", [(0, 3.0), (-1e12, 3.0), (1e12, 0), (1e12, -2.0),
                                                  (float("nan"), 3.0), (1e12, float("inf"))])
def test_invalid_parameters(hashrate, target_days):
    source = MockBlockSource(50, 1.0)
    with pytest.raises(InvalidParameter):
        evaluate(source, 40, hashrate, target_days)
    assert source.lookups == []


@pytest.mark.parametrize("hashes_per_difficulty", [0, -1.0, float("nan")])
def test_invalid_hashes_per_difficulty(hashes_per_difficulty):
    with pytest.raises(InvalidParameter):
        evaluate(MockBlockSource(50, 1.0), 40, 1e12, 3.0, hashes_per_difficulty=hashes_per_difficulty)


def test_negative_fork_height():
    source = MockBlockSource(50, 1.0)
    with pytest.raises(InvalidParameter):
        evaluate(source, -5, 1e12, 3.0)
    assert source.lookups == []


@pytest.mark.parametrize("difficulty", [0.0, -1.0, float("inf"), float("nan")])
def test_invalid_current_difficulty(difficulty):
    with pytest.raises(DataUnavailable):
        evaluate(MockBlockSource(50, difficulty), 40, 1e12, 3.0)


def test_missing_block():
    with pytest.raises(DataUnavailable) as e:
        evaluate(MockBlockSource(50, 1.0, missing=[47]), 40, 1e12, 3.0)
    assert e.value.height == 47


def test_hashes_per_difficulty():
    source = MockBlockSource(50, 1.0)
    default = evaluate(source, 40, 1e12, 3.0)
    doubled = evaluate(source, 40, 1e12, 3.0, hashes_per_difficulty=2 * HASHES_PER_DIFFICULTY)
    assert doubled.blocks_needed == default.blocks_needed
    assert doubled.time_required_days == pytest.approx(2 * default.time_required_days)
    assert doubled.hashrate_required == pytest.approx(2 * default.hashrate_required)


def test_time_scales_with_hashrate():
    source = MockBlockSource(50, 1.0)
    slow = evaluate(source, 40, 1e9, 3.0)
    fast = evaluate(source, 40, 1e12, 3.0)
    assert slow.time_required_hours == pytest.approx(1000 * fast.time_required_hours)
    assert slow.hashrate_required == fast.hashrate_required


def test_progress_is_passed_on():
    events = []
    evaluate(MockBlockSource(50, 1.0), 40, 1e12, 3.0, progress=lambda *args: events.append(args))
    assert events == [(50, 1.0, 11, 11)]
