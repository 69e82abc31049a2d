"""
Command-line entry point.

    python -m txflag data.json [--very-large 10000] [--first-contact 1000]
                               [--window-minutes 10]

Prints the same JSON document /analyze returns.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
import time

from .config import (
    LARGE_FIRST_CONTACT_MIN_VALUE,
    RAPID_REPEAT_WINDOW_MINUTES,
    VERY_LARGE_TX_MIN_VALUE,
)
from .formatter import format_output
from .parser import load_dataset
from .pipeline import run_all

log = logging.getLogger("txflag")


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(prog="txflag", description="Flag suspicious transactions.")
    ap.add_argument("path", help="JSON file with 'users' and 'transactions' arrays")
    ap.add_argument("--very-large", type=float, default=VERY_LARGE_TX_MIN_VALUE)
    ap.add_argument("--first-contact", type=float, default=LARGE_FIRST_CONTACT_MIN_VALUE)
    ap.add_argument("--window-minutes", type=float, default=RAPID_REPEAT_WINDOW_MINUTES)
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)-8s %(name)s │ %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        stream=sys.stderr,
    )

    start = time.perf_counter()
    try:
        dataset, parse_stats = load_dataset(args.path)
    except (OSError, ValueError) as exc:
        log.error("Cannot load %s: %s", args.path, exc)
        return 1

    outcomes = run_all(
        dataset,
        very_large_threshold=args.very_large,
        first_contact_threshold=args.first_contact,
        window_minutes=args.window_minutes,
    )
    result = format_output(outcomes, dataset, time.perf_counter() - start, parse_stats)
    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
