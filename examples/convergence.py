#! /usr/bin/env python

"""
Example sweep that approximates the number pi with increasing precision.

All steps run in order when the script is executed::

    ./convergence.py

"""

from piseries.reports import ConvergenceReport, Report
from piseries.reports.plot import ErrorPlotReport
from piseries.sweep import Sweep
from piseries import tools


EXPPATH = "data/convergence-eval"


class TermsVsErrorReport(Report):
    def get_text(self):
        lines = []
        for run in sorted(self.props.values(), key=lambda run: run["limit"]):
            lines.append(f"{run['limit']} {run['error']!r}")
        return "\n".join(lines)


def good(run):
    return run["error"] <= 0.01


tools.configure_logging()

exp = Sweep(EXPPATH, limits=[1, 5, 10, 50, 100, 500, 800, 5000])
exp.add_report(ConvergenceReport(digits=6), outfile="convergence.html")
exp.add_report(ConvergenceReport(format="txt", filter=good), outfile="good.txt")
exp.add_report(ErrorPlotReport(format="pdf"), outfile="error.pdf")
exp.add_report(TermsVsErrorReport(format="txt"), outfile="plot.dat")

exp.run_steps()
