#! /usr/bin/env python

"""Compute pi with the Leibniz series and print the result."""

import logging
import math
import sys
import time

from piseries import series, tools


def entry_point():
    """Return the approximation for the default number of terms."""
    return series.approximate_pi()


def get_argument_parser():
    parser = tools.get_argument_parser(description=__doc__)
    parser.add_argument(
        "--limit",
        type=tools.non_negative_int,
        default=series.DEFAULT_LIMIT,
        help="number of series terms",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="verbosity of log messages",
    )
    return parser


def main(args=None):
    options = get_argument_parser().parse_args(args)
    tools.configure_logging(getattr(logging, options.log_level))

    logging.info(f"Summing {options.limit} terms")
    start = time.perf_counter()
    pi = series.approximate_pi(options.limit)
    elapsed = time.perf_counter() - start

    print(f"Pi: {pi:f}")
    print(f"Time: {elapsed:f}")
    print(f"Error: {abs(math.pi - pi):g}")
    print(f"Bound: {series.remainder_bound(options.limit):g}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
