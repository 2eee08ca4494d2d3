""" Parsing of serialized block headers as returned by `getblockheader <hash> false`. """

from binascii import hexlify, unhexlify
from collections import namedtuple
from struct import Struct

from .crypto import double_sha256

__all__ = ['BlockHeader', 'HEADER_SIZE']

_HEADER_FORMAT = Struct("<I32s32sIII")
HEADER_SIZE = _HEADER_FORMAT.size


class BlockHeader(namedtuple("BlockHeader", ["version", "prev_block_hash", "merkle_root_hash", "time", "bits",
                                             "nonce", "raw"])):
    """
    A block header, still carrying its serialized form so that its hash can be checked.

    :ivar version: The block version field.
    :vartype version: int
    :ivar prev_block_hash: The hash of the previous block, in serialization (little endian) order.
    :vartype prev_block_hash: bytes
    :ivar merkle_root_hash: The merkle root of the transactions, in serialization order.
    :vartype merkle_root_hash: bytes
    :ivar time: The block timestamp (seconds since the epoch).
    :vartype time: int
    :ivar bits: The compact target of this block.
    :vartype bits: int
    :ivar nonce: The nonce.
    :vartype nonce: int
    :ivar raw: The serialized header.
    :vartype raw: bytes
    """

    @classmethod
    def from_bytes(cls, raw: bytes) -> 'BlockHeader':
        if len(raw) != HEADER_SIZE:
            raise ValueError("A block header has {} bytes, got {}".format(HEADER_SIZE, len(raw)))
        return cls(*_HEADER_FORMAT.unpack(raw), raw=bytes(raw))

    @classmethod
    def from_hex(cls, val: str) -> 'BlockHeader':
        """ Parses the hex string the node returns for a non-verbose header request. """
        return cls.from_bytes(unhexlify(val))

    @property
    def hash_hex(self) -> str:
        """ The block hash as displayed by nodes and explorers (byte-reversed). """
        return hexlify(double_sha256(self.raw)[::-1]).decode()
