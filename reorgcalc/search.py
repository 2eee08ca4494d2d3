""" Searching recent fork heights for reorgs that fit into a time budget. """

import logging
from typing import List

from .calculator import ReorgCalculation, evaluate, check_positive
from .config import CANDIDATE_DEPTHS, DEFAULT_TARGET_DAYS, HASHES_PER_DIFFICULTY
from .errors import DataUnavailable, InvalidForkHeight, InvalidParameter
from .source import BlockMetadataSource

__all__ = ['candidate_heights', 'search_viable', 'find_viable_heights']


def candidate_heights(current_height: int) -> List[int]:
    """ The fork heights tried by the search, deepest reorg last. Heights below 1 are left out. """
    return [current_height - depth for depth in CANDIDATE_DEPTHS if current_height - depth > 0]


def search_viable(source: BlockMetadataSource, hashrate: float, max_days: float,
                  target_days: float = DEFAULT_TARGET_DAYS,
                  hashes_per_difficulty: float = HASHES_PER_DIFFICULTY) -> List[ReorgCalculation]:
    """
    Evaluates every candidate fork height and returns the calculations of those that can be
    reorged within `max_days` at `hashrate`, in candidate order.

    A candidate whose block data cannot be read is logged and skipped; the remaining candidates
    are still evaluated. Invalid parameters are raised before any candidate is tried.
    """
    check_positive("hashrate", hashrate)
    check_positive("target days", target_days)
    check_positive("hashes per difficulty", hashes_per_difficulty)
    if not max_days >= 0:
        raise InvalidParameter("max days must not be negative, got {}".format(max_days))

    viable = []
    for height in candidate_heights(source.current_height()):
        try:
            calc = evaluate(source, height, hashrate, target_days, hashes_per_difficulty)
        except (DataUnavailable, InvalidForkHeight) as e:
            # the tip may have moved back below a candidate since the height was read
            logging.warning("Failed to calculate for height %d: %s", height, e)
            continue
        if calc.time_required_days <= max_days:
            viable.append(calc)
    return viable


def find_viable_heights(source: BlockMetadataSource, hashrate: float, max_days: float,
                        target_days: float = DEFAULT_TARGET_DAYS,
                        hashes_per_difficulty: float = HASHES_PER_DIFFICULTY) -> List[int]:
    """ The fork heights of :any:`search_viable`. """
    return [calc.fork_height for calc in search_viable(source, hashrate, max_days, target_days,
                                                       hashes_per_difficulty)]
