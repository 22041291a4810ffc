from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from bip.broadcast import build_broadcast_tree
from bip.errors import BipError
from bip.io_nodes import load_nodes, write_path_csv
from bip.logging_config import setup_logging
from bip.report import print_final, print_round
from bip.visualization import plot_broadcast_tree

USAGE = "Run the command: python main.py locations.txt"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

logger = logging.getLogger("bip.main")


class _Parser(argparse.ArgumentParser):
    """Wrong arguments print the usage line on stdout and exit with -1."""

    def error(self, message):
        print(USAGE)
        raise SystemExit(-1)


def build_parser() -> argparse.ArgumentParser:
    ap = _Parser(description="Minimum-power broadcast tree with the BIP heuristic.")
    ap.add_argument("locations", type=str, help="Text file with one (x,y) node per line; the first is the source.")
    ap.add_argument("--csv", type=str, default=None, help="Write the transmission path to this CSV file.")
    ap.add_argument("--plot", type=str, default=None, help="Save a plot of the broadcast tree to this file.")
    ap.add_argument("--log-level", type=str.upper, default="WARNING", choices=LOG_LEVELS)
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(getattr(logging, args.log_level))

    try:
        points = load_nodes(args.locations)
        result = build_broadcast_tree(points, on_round=print_round)
    except BipError as e:
        logger.error(str(e))
        print(f"Error: {e}")
        return 1

    print_final(result)

    if args.csv:
        write_path_csv(result.path, args.csv)

    if args.plot:
        title = f"{os.path.basename(args.locations)} | transmitters={len(result.transmitters)} | cost={result.total_cost:g}"
        plot_broadcast_tree(result, title=title, save_path=args.plot, show=False)
        print(f"Saved plot -> {args.plot}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
