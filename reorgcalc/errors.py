""" The ways a reorg calculation can fail. """

from typing import Optional

__all__ = ['ReorgError', 'InvalidForkHeight', 'DataUnavailable', 'InvalidParameter']


class ReorgError(Exception):
    """ Base class of all errors raised by the calculator. """


class InvalidForkHeight(ReorgError):
    """
    The requested fork height lies above the tip of the chain.

    :ivar fork_height: The requested fork height.
    :vartype fork_height: int
    :ivar current_height: The height of the chain tip at the time of the request.
    :vartype current_height: int
    """

    def __init__(self, fork_height: int, current_height: int):
        super().__init__("Fork height {} exceeds current chain height {}".format(fork_height, current_height))
        self.fork_height = fork_height
        self.current_height = current_height


class DataUnavailable(ReorgError):
    """
    Block metadata could not be retrieved (or made no sense).

    :ivar height: The block height that was being looked up, if any.
    :vartype height: Optional[int]
    """

    def __init__(self, message: str, height: Optional[int] = None):
        if height is not None:
            message = "{} (block {})".format(message, height)
        super().__init__(message)
        self.height = height


class InvalidParameter(ReorgError, ValueError):
    """ A numeric parameter (hashrate, time budget, height range, ...) is out of range. """
