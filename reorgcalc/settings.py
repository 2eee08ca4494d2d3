""" Settings taken from the environment and an optional `.env` file. """

import os
from collections import namedtuple
from typing import Callable, Optional
from urllib.parse import urlparse

from dotenv import find_dotenv, load_dotenv

from .config import *
from .errors import InvalidParameter

__all__ = ['Settings', 'load_settings', 'url_with_port']


class Settings(namedtuple("Settings", ["rpc_url", "rpc_user", "rpc_password", "rpc_port", "hashrate",
                                       "target_days", "output_file"])):
    """
    The defaults for everything that can also be given on the command line.

    :ivar rpc_url: The URL of the node's RPC server (`RPC_URL`).
    :vartype rpc_url: str
    :ivar rpc_port: The RPC port (`RPC_PORT`); replaces the port in `rpc_url`.
    :vartype rpc_port: int
    :ivar hashrate: The available hashrate in H/s (`DEFAULT_HASHRATE`).
    :vartype hashrate: float
    :ivar target_days: The time budget in days (`TARGET_DAYS`).
    :vartype target_days: float
    :ivar output_file: Where results are appended to (`OUTPUT_FILE`).
    :vartype output_file: str
    """


def _read(name: str, default, parse: Callable = str):
    val = os.environ.get(name)
    if val is None:
        return default
    try:
        return parse(val)
    except ValueError:
        raise InvalidParameter("Invalid {} in environment: {!r}".format(name, val))


def load_settings(env_file: Optional[str] = None) -> Settings:
    """
    Reads the settings from the environment, after loading `env_file` (or a `.env` file found
    in the working directory or above) into it. Variables that are already set win over the file.
    """
    load_dotenv(env_file or find_dotenv(usecwd=True))
    return Settings(
        rpc_url=_read("RPC_URL", DEFAULT_RPC_URL),
        rpc_user=_read("RPC_USER", DEFAULT_RPC_USER),
        rpc_password=_read("RPC_PASSWORD", DEFAULT_RPC_PASSWORD),
        rpc_port=_read("RPC_PORT", DEFAULT_RPC_PORT, int),
        hashrate=_read("DEFAULT_HASHRATE", DEFAULT_HASHRATE, float),
        target_days=_read("TARGET_DAYS", DEFAULT_TARGET_DAYS, float),
        output_file=_read("OUTPUT_FILE", DEFAULT_OUTPUT_FILE),
    )


def url_with_port(url: str, port: int) -> str:
    """ Returns `url` with its port replaced by `port`. """
    parsed = urlparse(url)
    if parsed.hostname is None:
        raise InvalidParameter("Invalid RPC URL {!r}".format(url))
    host = parsed.hostname
    if ":" in host:
        host = "[{}]".format(host)
    return parsed._replace(netloc="{}:{}".format(host, port)).geturl()
