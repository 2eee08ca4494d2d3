#!/usr/bin/env python3

"""
Estimates how much work, time and hashrate a reorg of a Testnet4 chain needs, reading the
chain's block metadata from a node over RPC. Results are printed and appended to a text file.
"""

__all__ = []

import argparse
import sys

import logging

from reorgcalc.calculator import evaluate
from reorgcalc.config import SUGGESTED_FORK_DEPTH
from reorgcalc.errors import ReorgError, InvalidParameter
from reorgcalc.report import format_calculation, format_hashrate, save_calculations
from reorgcalc.rpc_client import NodeRPCClient
from reorgcalc.search import search_viable
from reorgcalc.settings import load_settings, url_with_port


def positive_float(val: str) -> float:
    """ Parses a number from the command line that has to be greater than zero. """
    res = float(val)
    if not res > 0:
        raise argparse.ArgumentTypeError("{} is not a positive number".format(val))
    return res


def main():
    parser = argparse.ArgumentParser(description="Calculate Testnet4 reorg work requirements.")
    parser.add_argument("-f", "--fork-height", type=int,
                        help="The block height the reorg starts from. Defaults to {} blocks below the tip."
                             .format(SUGGESTED_FORK_DEPTH))
    parser.add_argument("-t", "--target-days", type=positive_float,
                        help="The time budget in days. Defaults to TARGET_DAYS.")
    parser.add_argument("--hashrate", type=positive_float,
                        help="The available hashrate in hashes per second. Defaults to DEFAULT_HASHRATE.")
    parser.add_argument("--rpcuser", help="The RPC user name. Defaults to RPC_USER.")
    parser.add_argument("--rpcpassword", help="The RPC password. Defaults to RPC_PASSWORD.")
    parser.add_argument("--rpcport", type=int, help="The RPC port of the node. Defaults to RPC_PORT.")
    parser.add_argument("--batch-calculate", action="store_true",
                        help="Search recent fork heights for reorgs that fit into the time budget.")
    parser.add_argument("--output-file", help="The file results are appended to. Defaults to OUTPUT_FILE.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug output.")

    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)-8s %(message)s")

    try:
        run(args)
    except ReorgError as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)


def run(args: argparse.Namespace):
    settings = load_settings()
    hashrate = args.hashrate if args.hashrate is not None else settings.hashrate
    target_days = args.target_days if args.target_days is not None else settings.target_days
    if not (hashrate > 0 and target_days > 0):
        raise InvalidParameter("hashrate and target days have to be positive")

    rpc_url = url_with_port(settings.rpc_url, args.rpcport or settings.rpc_port)
    client = NodeRPCClient(rpc_url, args.rpcuser or settings.rpc_user, args.rpcpassword or settings.rpc_password)
    client.check_connection()

    print("Connected to Testnet4 node at {}".format(rpc_url))
    current_height = client.current_height()
    print("Current block height: {}".format(current_height))
    try:
        print("Chain: {}".format(client.chain_name()))
    except ReorgError:
        print("Chain: testnet4 (detected)")

    calculations = []
    if args.batch_calculate:
        print()
        print("Finding viable target heights for {} within {} days...".format(format_hashrate(hashrate), target_days))
        calculations = search_viable(client, hashrate, target_days, target_days)
        if not calculations:
            print("No viable target heights found within {} days with {}".format(target_days, format_hashrate(hashrate)))
        else:
            print("Found {} viable target heights:".format(len(calculations)))
            for calc in calculations:
                print(format_calculation(calc, hashrate))
    elif args.fork_height is not None:
        calc = evaluate(client, args.fork_height, hashrate, target_days)
        print(format_calculation(calc, hashrate))
        calculations.append(calc)
    else:
        suggested_height = max(current_height - SUGGESTED_FORK_DEPTH, 0)
        print()
        print("No fork height specified. Calculating for suggested height: {}".format(suggested_height))
        calc = evaluate(client, suggested_height, hashrate, target_days)
        print(format_calculation(calc, hashrate))
        calculations.append(calc)

        print()
        print("To calculate for a specific height, use: --fork-height <height>")
        print("To find all viable heights, use: --batch-calculate")

    output_file = args.output_file or settings.output_file
    save_calculations(calculations, output_file, hashrate)
    print("Results saved to: {}".format(output_file))


if __name__ == '__main__':
    main()
