""" The JSON-RPC client used to read block metadata from a Testnet4 node. """

import json
import logging
from typing import Callable

import requests

from .block_header import BlockHeader
from .config import RPC_TIMEOUT
from .errors import DataUnavailable
from .source import BlockMetadataSource

__all__ = ['NodeRPCClient']


def _block_hash(val) -> str:
    if not isinstance(val, str):
        raise TypeError("block hash must be a string")
    return val


class NodeRPCClient(BlockMetadataSource):
    """
    Reads block metadata from a bitcoind-compatible node through its JSON-RPC interface.

    Every failure (connection problems, HTTP errors, errors reported by the node) is raised as
    :any:`DataUnavailable`.

    :param url: The URL of the node's RPC server, e.g. `http://127.0.0.1:48337`.
    :param user: The RPC user name.
    :param password: The RPC password.
    """

    def __init__(self, url: str, user: str, password: str, timeout: float = RPC_TIMEOUT):
        self.sess = requests.Session()
        self.sess.auth = (user, password)
        self.url = url
        self.timeout = timeout

    def call(self, method: str, *params, height=None):
        """
        Performs the RPC call `method` and returns its result.

        :param height: The block height the call is about, reported in errors.
        """
        payload = {"jsonrpc": "1.0", "id": "reorgcalc", "method": method, "params": list(params)}
        try:
            resp = self.sess.post(self.url, data=json.dumps(payload),
                                  headers={"Content-Type": "application/json"}, timeout=self.timeout)
        except requests.RequestException as e:
            raise DataUnavailable("RPC call {} failed: {}".format(method, e), height) from e

        # the node reports RPC errors with an HTTP error status and a JSON body
        try:
            reply = resp.json()
        except ValueError:
            raise DataUnavailable("RPC call {} failed with HTTP status {}".format(method, resp.status_code), height)

        if not isinstance(reply, dict):
            raise DataUnavailable("RPC call {} returned no JSON object".format(method), height)

        error = reply.get("error")
        if error:
            if isinstance(error, dict):
                error = "{} (code {})".format(error.get("message"), error.get("code"))
            raise DataUnavailable("RPC call {} failed: {}".format(method, error), height)
        if resp.status_code != 200:
            raise DataUnavailable("RPC call {} failed with HTTP status {}".format(method, resp.status_code), height)
        return reply.get("result")

    def call_as(self, parse: Callable, method: str, *params, height=None):
        """ Performs the RPC call `method` and converts its result with `parse`. """
        result = self.call(method, *params, height=height)
        try:
            return parse(result)
        except (KeyError, TypeError, ValueError) as e:
            raise DataUnavailable("Unexpected result of RPC call {}: {!r}".format(method, result), height) from e

    def check_connection(self):
        """ Makes sure the node can be reached with the configured credentials. """
        try:
            self.call("getblockcount")
        except DataUnavailable as e:
            raise DataUnavailable("Failed to connect to node at {}: {}".format(self.url, e)) from e

    def chain_name(self) -> str:
        """ The name of the chain the node follows (`testnet4` for Testnet4). """
        return self.call_as(lambda info: str(info["chain"]), "getblockchaininfo")

    def current_height(self) -> int:
        return self.call_as(int, "getblockcount")

    def current_difficulty(self) -> float:
        return self.call_as(float, "getdifficulty")

    def compact_target_at(self, height: int) -> int:
        """
        Fetches the header of the block at `height` and returns its compact target, after checking
        that the header actually hashes to the block hash the node reported for that height.
        """
        block_hash = self.call_as(_block_hash, "getblockhash", height, height=height)
        header = self.call_as(BlockHeader.from_hex, "getblockheader", block_hash, False, height=height)

        if header.hash_hex != block_hash:
            logging.warning("header of block %d hashes to %s instead of %s", height, header.hash_hex, block_hash)
            raise DataUnavailable("Block header does not match block hash {}".format(block_hash), height)
        return header.bits
