"""
Estimates the work, time and hashrate needed to replace the chain above a fork height.

An attacker who forks off at `fork_height` has to produce a chain with more accumulated work than
the blocks from `fork_height` up to the current tip. New blocks are mined at today's difficulty,
so the number of blocks they need is the existing chain work divided by the current difficulty,
rounded up. A block at difficulty `D` takes `D * HASHES_PER_DIFFICULTY` hash attempts on average.
"""

import logging
import math
from collections import namedtuple
from datetime import datetime, timezone
from typing import Optional

from .chainwork import accumulate_work, ProgressHandler
from .config import HASHES_PER_DIFFICULTY, SECONDS_PER_DAY, SECONDS_PER_HOUR
from .errors import DataUnavailable, InvalidForkHeight, InvalidParameter
from .source import BlockMetadataSource

__all__ = ['ReorgCalculation', 'evaluate', 'check_positive']


class ReorgCalculation(namedtuple("ReorgCalculation", ["fork_height", "current_height", "blocks_to_reorg",
                                                       "total_work", "current_difficulty", "blocks_needed",
                                                       "time_required_hours", "time_required_days",
                                                       "hashrate_required", "target_days", "timestamp"])):
    """
    The result of one reorg feasibility evaluation.

    :ivar fork_height: The height where the competing chain branches off.
    :vartype fork_height: int
    :ivar current_height: The height of the chain tip when the evaluation ran.
    :vartype current_height: int
    :ivar blocks_to_reorg: The number of existing blocks that would be replaced.
    :vartype blocks_to_reorg: int
    :ivar total_work: The summed difficulty of the blocks that would be replaced.
    :vartype total_work: float
    :ivar current_difficulty: The difficulty at which the new chain would be mined.
    :vartype current_difficulty: float
    :ivar blocks_needed: How many blocks at `current_difficulty` outweigh `total_work`.
    :vartype blocks_needed: int
    :ivar time_required_hours: The time needed with the hashrate the evaluation was run with.
    :vartype time_required_hours: float
    :ivar time_required_days: The same as `time_required_hours`, in days.
    :vartype time_required_days: float
    :ivar hashrate_required: The hashrate (H/s) needed to finish within `target_days`.
    :vartype hashrate_required: float
    :ivar target_days: The time budget `hashrate_required` refers to.
    :vartype target_days: float
    :ivar timestamp: When the evaluation finished (UTC).
    :vartype timestamp: datetime
    """

    @property
    def single_block_suffices(self) -> bool:
        """ Whether one block at the current difficulty already outweighs the replaced blocks. """
        return self.blocks_needed <= 1


def check_positive(name: str, value: float):
    """ Raises :any:`InvalidParameter` unless `value` is a finite number greater than zero. """
    if not (value > 0 and math.isfinite(value)):
        raise InvalidParameter("{} must be a positive number, got {}".format(name, value))


def evaluate(source: BlockMetadataSource, fork_height: int, hashrate: float, target_days: float,
             hashes_per_difficulty: float = HASHES_PER_DIFFICULTY,
             progress: 'Optional[ProgressHandler]' = None) -> ReorgCalculation:
    """
    Computes what it takes to replace all blocks from `fork_height` to the current tip.

    :param hashrate: The hashrate (H/s) available to the attacker.
    :param target_days: The time budget for which the required hashrate is computed.
    :param hashes_per_difficulty: Expected hash attempts per block at difficulty 1.
    :param progress: Passed on to :any:`accumulate_work`.
    :raises InvalidForkHeight: If `fork_height` is above the current tip.
    :raises InvalidParameter: If `fork_height` is negative or `hashrate`/`target_days` are not positive.
    :raises DataUnavailable: If the node cannot supply the needed metadata.
    """
    check_positive("hashrate", hashrate)
    check_positive("target days", target_days)
    check_positive("hashes per difficulty", hashes_per_difficulty)
    if fork_height < 0:
        raise InvalidParameter("fork height must not be negative, got {}".format(fork_height))

    current_height = source.current_height()
    if fork_height > current_height:
        raise InvalidForkHeight(fork_height, current_height)

    current_difficulty = source.current_difficulty()
    if not (current_difficulty > 0 and math.isfinite(current_difficulty)):
        raise DataUnavailable("Invalid current difficulty {}".format(current_difficulty))

    total_work = accumulate_work(source, fork_height, current_height, progress)
    blocks_to_reorg = current_height - fork_height + 1
    blocks_needed = math.ceil(total_work / current_difficulty)

    hashes_per_block = current_difficulty * hashes_per_difficulty
    time_per_block_seconds = hashes_per_block / hashrate
    total_time_seconds = blocks_needed * time_per_block_seconds
    hashrate_required = blocks_needed * hashes_per_block / (target_days * SECONDS_PER_DAY)

    logging.debug("fork at %d: %d blocks replaced, %d blocks needed", fork_height, blocks_to_reorg, blocks_needed)

    return ReorgCalculation(fork_height, current_height, blocks_to_reorg, total_work, current_difficulty,
                            blocks_needed, total_time_seconds / SECONDS_PER_HOUR,
                            total_time_seconds / SECONDS_PER_DAY, hashrate_required, target_days,
                            datetime.now(timezone.utc))
