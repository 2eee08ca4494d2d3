MAX_TARGET_BITS = 0x1d00ffff
""" The compact encoding of the maximum (easiest) target. Its difficulty is 1 by definition. """

HASHES_PER_DIFFICULTY = 2.0 ** 32
"""
The expected number of hash attempts needed to find a block at difficulty 1.

Only valid for networks whose maximum target is `MAX_TARGET_BITS`; other target schemes need a
different value, which is why the calculator accepts it as a parameter.
"""

SECONDS_PER_HOUR = 3600.0
SECONDS_PER_DAY = 86400.0

CANDIDATE_DEPTHS = (1, 10, 50, 100, 500, 1000, 5000)
""" How many blocks below the current height the batch search tries to fork, in this order. """

PROGRESS_INTERVAL = 1000
""" Chain work progress is reported at every height divisible by this number. """

SUGGESTED_FORK_DEPTH = 100
""" The depth below the current height used when no fork height is given. """

DEFAULT_RPC_URL = "http://127.0.0.1:48337"
""" Where a Testnet4 node listens for JSON-RPC requests by default. """
DEFAULT_RPC_PORT = 48337
DEFAULT_RPC_USER = "myusername"
DEFAULT_RPC_PASSWORD = "mypassword"
RPC_TIMEOUT = 30
""" Seconds until a single RPC request is given up. """

DEFAULT_HASHRATE = 1e15
""" The hashrate (hashes per second) assumed when none is configured. """
DEFAULT_TARGET_DAYS = 3.0
""" The time budget (in days) assumed when none is configured. """

DEFAULT_OUTPUT_FILE = "reorg_calculations.txt"
""" The file results are appended to. """

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S UTC"
