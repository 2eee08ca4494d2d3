""" Summing up the proof of work on a range of blocks. """

import logging
import math
from typing import Callable, Optional

from .config import PROGRESS_INTERVAL
from .difficulty import difficulty_from_compact_target
from .errors import DataUnavailable, InvalidParameter
from .source import BlockMetadataSource

__all__ = ['accumulate_work']

ProgressHandler = Callable[[int, float, int, int], None]
""" Called with the height, the difficulty of that block, the number of processed blocks and the total. """


def accumulate_work(source: BlockMetadataSource, from_height: int, to_height: int,
                    progress: 'Optional[ProgressHandler]' = None) -> float:
    """
    Returns the sum of the difficulties of all blocks from `from_height` to `to_height`
    (both inclusive), in ascending height order.

    If any block cannot be looked up, the :any:`DataUnavailable` error is passed on and no
    total is returned.

    :param progress: Gets notified at every `PROGRESS_INTERVAL`-th height and at `to_height`.
    """
    if from_height > to_height:
        raise InvalidParameter("Height range {}..{} is empty".format(from_height, to_height))

    logging.info("Calculating chain work from block %d to %d...", from_height, to_height)
    total = to_height - from_height + 1
    total_work = 0.0
    for processed, height in enumerate(range(from_height, to_height + 1), 1):
        difficulty = difficulty_from_compact_target(source.compact_target_at(height))
        if not math.isfinite(difficulty) or difficulty <= 0:
            raise DataUnavailable("Block has an invalid target", height)
        total_work += difficulty

        if height % PROGRESS_INTERVAL == 0 or height == to_height:
            logging.info("  Processed block %d (difficulty: %.2f)", height, difficulty)
            if progress is not None:
                progress(height, difficulty, processed, total)

    return total_work
