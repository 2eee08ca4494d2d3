""" The hash functions used for block headers. """

from Crypto.Hash import SHA256

__all__ = ['get_hasher', 'double_sha256']


def get_hasher():
    """ Returns a object that you can use for hashing, compatible to the `hashlib` interface. """
    return SHA256.new()


def double_sha256(data: bytes) -> bytes:
    """ SHA-256 applied twice, as used for block hashes. """
    first = get_hasher()
    first.update(data)
    second = get_hasher()
    second.update(first.digest())
    return second.digest()
