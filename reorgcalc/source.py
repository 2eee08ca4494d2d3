""" The interface through which the calculator reads block metadata. """

__all__ = ['BlockMetadataSource']


class BlockMetadataSource:
    """
    Supplies the chain metadata needed to estimate the cost of a reorg.

    Implementations raise :any:`DataUnavailable` whenever a value cannot be retrieved. The
    calculator only calls these three methods, so tests can substitute a fixed in-memory chain.
    """

    def current_height(self) -> int:
        """ The height of the current chain tip. """
        raise NotImplementedError()

    def current_difficulty(self) -> float:
        """ The difficulty the network currently requires for new blocks. """
        raise NotImplementedError()

    def compact_target_at(self, height: int) -> int:
        """ The compact target ("bits") of the block at `height` on the current chain. """
        raise NotImplementedError()
