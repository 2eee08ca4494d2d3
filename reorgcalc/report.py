""" Human readable output of reorg calculations, on the terminal and in the results file. """

from datetime import datetime, timezone
from typing import Iterable, Optional

from .calculator import ReorgCalculation
from .config import TIMESTAMP_FORMAT

__all__ = ['format_hashrate', 'format_calculation', 'save_calculations']


def format_hashrate(hashrate: float) -> str:
    """ Formats a hashrate in H/s with the largest fitting unit up to PH/s. """
    if hashrate >= 1e15:
        return "{:.2f} PH/s".format(hashrate / 1e15)
    elif hashrate >= 1e12:
        return "{:.2f} TH/s".format(hashrate / 1e12)
    elif hashrate >= 1e9:
        return "{:.2f} GH/s".format(hashrate / 1e9)
    return "{:.0f} H/s".format(hashrate)


def _format_days(days: float) -> str:
    return "{:g} days".format(days)


def format_calculation(calc: ReorgCalculation, provided_hashrate: float) -> str:
    """ The report shown on the terminal for a single calculation. """
    lines = [
        "",
        "=== Testnet4 Reorg Calculation ===",
        "Timestamp: {}".format(calc.timestamp.strftime(TIMESTAMP_FORMAT)),
        "Fork Height: {}".format(calc.fork_height),
        "Current Height: {}".format(calc.current_height),
        "Blocks to Reorg: {}".format(calc.blocks_to_reorg),
        "Total Existing Chain Work: {:.2f}".format(calc.total_work),
        "Current Difficulty: {:.2f}".format(calc.current_difficulty),
        "New Chain Blocks Needed: {}".format(calc.blocks_needed),
        "",
        "=== With Your Hashrate ({}) ===".format(format_hashrate(provided_hashrate)),
        "Time Required: {:.2f} hours ({:.2f} days)".format(calc.time_required_hours, calc.time_required_days),
        "",
        "=== For Target Time ({}) ===".format(_format_days(calc.target_days)),
        "Hashrate Required: {}".format(format_hashrate(calc.hashrate_required)),
    ]
    if calc.single_block_suffices:
        lines += ["", "Note: A single high-difficulty block may suffice due to Testnet4's 20-minute rule."]
    return "\n".join(lines)


def save_calculations(calculations: Iterable[ReorgCalculation], path: str, provided_hashrate: float,
                      now: Optional[datetime] = None):
    """
    Appends `calculations` to the text file at `path`, below a header line with the time of this
    run. Each calculation is written as one labeled field per line, followed by a `---` line.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    with open(path, "a") as f:
        f.write("\n=== Testnet4 Reorg Calculations - {} ===\n".format(now.strftime(TIMESTAMP_FORMAT)))
        for calc in calculations:
            f.write("\nFork Height: {}\n".format(calc.fork_height))
            f.write("Current Height: {}\n".format(calc.current_height))
            f.write("Blocks to Reorg: {}\n".format(calc.blocks_to_reorg))
            f.write("Total Work: {:.2f}\n".format(calc.total_work))
            f.write("Current Difficulty: {:.2f}\n".format(calc.current_difficulty))
            f.write("Blocks Needed: {}\n".format(calc.blocks_needed))
            f.write("Time Required ({}): {:.2f} days\n".format(format_hashrate(provided_hashrate),
                                                                calc.time_required_days))
            f.write("Hashrate for {}: {}\n".format(_format_days(calc.target_days),
                                                   format_hashrate(calc.hashrate_required)))
            f.write("Timestamp: {}\n".format(calc.timestamp.strftime(TIMESTAMP_FORMAT)))
            f.write("---\n")
