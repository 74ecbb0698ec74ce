#! /usr/bin/env python

"""
Evaluate the Leibniz approximation for several iteration counts.

A sweep is a list of named steps that run in order. The built-in steps
compute one run per iteration count and write the runs to a
``properties`` file, which the report steps read afterwards.

>>> sweep = Sweep("/tmp/sweep-eval", limits=[1, 10])
>>> list(sweep.steps)
['compute', 'write-properties']

"""

import functools
import logging
import math
import os
from pathlib import Path
import sys
import time

from piseries import series, tools
from piseries.reports import ConvergenceReport
from piseries.reports.plot import ErrorPlotReport


DEFAULT_LIMITS = [1, 2, 3, 10, 100, 800, 1000]
PROPERTIES_FILENAME = "properties"


def get_argument_parser():
    parser = tools.get_argument_parser(description=__doc__)
    steps = parser.add_mutually_exclusive_group()
    steps.add_argument(
        "steps",
        metavar="step",
        nargs="*",
        default=[],
        help="name or number of a step to run; list the steps if none is given",
    )
    steps.add_argument(
        "--all", dest="run_all_steps", action="store_true", help="run all steps"
    )
    parser.add_argument(
        "--limits",
        type=tools.limit_list,
        default=DEFAULT_LIMITS,
        help="comma-separated iteration counts, e.g. 1,10,800",
    )
    parser.add_argument(
        "--path", default=os.path.join("data", "sweep-eval"), help="output directory"
    )
    return parser


def evaluate(limit):
    """Approximate pi with *limit* terms and return the run properties."""
    start = time.perf_counter()
    pi = series.approximate_pi(limit)
    elapsed = time.perf_counter() - start
    error = abs(math.pi - pi)
    bound = series.remainder_bound(limit)
    return {
        "id": [f"limit-{limit}"],
        "limit": limit,
        "pi": pi,
        "error": error,
        "bound": bound,
        "within_bound": error <= bound,
        "time": elapsed,
    }


class Sweep:
    def __init__(self, path, limits=None):
        """
        Runs are stored under the directory *path*. *limits* lists the
        iteration counts to evaluate (default: ``DEFAULT_LIMITS``).
        """
        self.path = Path(path)
        self.limits = []
        self.steps = {}
        self.props = tools.Properties(self.path / PROPERTIES_FILENAME)
        for limit in DEFAULT_LIMITS if limits is None else limits:
            self.add_limit(limit)

        self.add_step("compute", self.compute)
        self.add_step("write-properties", self.props.write)

    def add_limit(self, limit):
        series.check_limit(limit)
        if limit in self.limits:
            raise ValueError(f"Limits must be unique: {limit}")
        self.limits.append(limit)

    def add_step(self, name, function, *args, **kwargs):
        """Append a step that calls ``function(*args, **kwargs)``."""
        if not name or name in self.steps:
            raise ValueError(f"Step names must be unique and non-empty: {name!r}")
        self.steps[name] = functools.partial(function, *args, **kwargs)

    def add_report(self, report, outfile):
        """Append a step that writes *report* to *outfile*.

        Relative paths are put under the sweep directory, and the file
        name is the step name.
        """
        self.add_step(os.path.basename(outfile), report, self.path, self.path / outfile)

    def compute(self):
        self.props.clear()
        for limit in self.limits:
            run = evaluate(limit)
            logging.info(f"limit={limit} pi={run['pi']!r} error={run['error']:g}")
            if not run["within_bound"]:
                logging.warning(f"Error exceeds the remainder bound for limit {limit}")
            self.props["-".join(run["id"])] = run

    def get_steps_text(self):
        lines = ["Available steps:"]
        for number, name in enumerate(self.steps, start=1):
            lines.append(f"{number:>3} {name}")
        return "\n".join(lines)

    def get_step_names(self, selection):
        """Map step names and 1-based numbers in *selection* to step names."""
        names = list(self.steps)
        selected = []
        for item in selection:
            if item.isdigit() and 1 <= int(item) <= len(names):
                selected.append(names[int(item) - 1])
            elif item in self.steps:
                selected.append(item)
            else:
                logging.critical(f'There is no step "{item}"')
        return selected

    def run_steps(self, selection=None):
        """Run the selected steps, or all steps if *selection* is empty."""
        names = self.get_step_names(selection) if selection else list(self.steps)
        for name in names:
            logging.info(f"Running step {name}")
            self.steps[name]()


def main(args=None):
    tools.configure_logging()
    parser = get_argument_parser()
    options = parser.parse_args(args)

    sweep = Sweep(options.path, limits=sorted(set(options.limits)))
    sweep.add_report(ConvergenceReport(), "convergence.html")
    sweep.add_report(ErrorPlotReport(), "error.png")

    if not options.steps and not options.run_all_steps:
        parser.print_help()
        print()
        print(sweep.get_steps_text())
        return 0
    sweep.run_steps(options.steps)
    return 0


if __name__ == "__main__":
    sys.exit(main())
