import logging

import matplotlib
from matplotlib import figure
from matplotlib.backends import backend_agg

from piseries.reports import Report


class ErrorPlotReport(Report):
    """
    Plot the absolute error and the remainder bound against the number
    of terms on log-log axes.

    Runs with zero terms or zero error have no place on logarithmic axes
    and are left out.

    >>> ErrorPlotReport(format="pdf").output_format
    'pdf'
    """

    STYLES = {
        "error": {"marker": "o", "linestyle": "-", "color": "tab:blue"},
        "bound": {"linestyle": "--", "color": "0.3"},
    }

    def __init__(
        self,
        title="Convergence of the Leibniz series",
        matplotlib_options=None,
        format="png",
        **kwargs,
    ):
        """
        *matplotlib_options* may be a dictionary of matplotlib rc
        parameters, e.g. ``{"font.size": 8}``.
        """
        Report.__init__(self, ["error", "bound"], format=format, **kwargs)
        self.title = title
        self.matplotlib_options = matplotlib_options or {}

    def get_supported_formats(self):
        return ["eps", "pdf", "pgf", "png"]

    def get_points(self, attribute):
        """Return sorted (limit, value) pairs that fit on log axes."""
        return sorted(
            (run["limit"], run[attribute])
            for run in self.props.values()
            if run.get("limit") and run.get(attribute)
        )

    def write(self):
        curves = {attr: self.get_points(attr) for attr in self.attributes}
        if not any(curves.values()):
            logging.info(f"Found no valid points for plot {self.outfile}")
            return

        with matplotlib.rc_context(self.matplotlib_options):
            fig = figure.Figure()
            canvas = backend_agg.FigureCanvasAgg(fig)
            axes = fig.add_subplot(111)
            axes.set_title(self.title)
            axes.set_xlabel("terms")
            axes.set_ylabel("absolute error")
            axes.set_xscale("log")
            axes.set_yscale("log")
            axes.grid(True, linestyle="-", color="0.75")
            for attribute, points in curves.items():
                if points:
                    limits, values = zip(*points)
                    axes.plot(limits, values, label=attribute, **self.STYLES[attribute])
            axes.legend(loc="upper right")

            self.outfile.parent.mkdir(parents=True, exist_ok=True)
            # bbox_inches="tight" breaks pgf export.
            kwargs = {} if self.output_format == "pgf" else {"bbox_inches": "tight"}
            canvas.print_figure(str(self.outfile), **kwargs)
        logging.info(f"Wrote file://{self.outfile}")
