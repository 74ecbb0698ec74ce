"""
Reports read the ``properties`` file written by a sweep and turn the
runs into tables or plots.
"""

import logging
from pathlib import Path

import txt2tags

from piseries import tools
from piseries.reports.markup import Document, WORDBREAK, escape


class Table(dict):
    """Rows of named cells, printed as txt2tags table markup.

    Rows are sorted naturally by name. Columns follow *columns* if given,
    otherwise they are sorted naturally. Floats are printed with *digits*
    decimal places.

    >>> t = Table(title="limit", columns=["pi", "error"], digits=3)
    >>> t.add_row("800", {"pi": 3.14034, "error": 0.00125})
    >>> t.add_row("10", {"pi": 3.04184, "error": 0.09975})
    >>> print(str(t).replace('""', ""))
    || limit | pi | error |
     | 10 | 3.042 | 0.100 |
     | 800 | 3.140 | 0.001 |
    """

    def __init__(self, title="", columns=None, digits=2):
        dict.__init__(self)
        self.title = title
        self.columns = columns
        self.digits = digits

    def add_row(self, name, cells):
        self[name] = dict(cells)

    @property
    def row_names(self):
        return tools.natural_sort(self)

    @property
    def col_names(self):
        if self.columns is not None:
            return list(self.columns)
        return tools.natural_sort({col for row in self.values() for col in row})

    def get_row(self, name):
        return [self[name].get(col) for col in self.col_names]

    def format_cell(self, value):
        if isinstance(value, float):
            return f"{value:.{self.digits}f}"
        if value is None:
            return "-"
        return escape(value)

    def __str__(self):
        header = [self.title] + [
            col.replace("_", "_" + WORDBREAK) for col in self.col_names
        ]
        lines = ["|| " + " | ".join(header) + " |"]
        for name in self.row_names:
            cells = [escape(name)] + [self.format_cell(v) for v in self.get_row(name)]
            lines.append(" | " + " | ".join(cells) + " |")
        return "\n".join(lines)


class Report:
    """
    Base class for reports.

    *attributes* selects the run attributes to show. If omitted, all
    numerical attributes are used. *format* is a txt2tags target such
    as ``html``, ``tex`` or ``txt``.

    *filter* and ``filter_<attribute>`` keyword arguments select or
    modify runs, see :func:`piseries.tools.filter_runs`. Only show runs
    that stay within the remainder bound:

    >>> report = Report(format="txt", filter_within_bound=True)

    Only show runs with many terms in a LaTeX report:

    >>> report = Report(
    ...     attributes=["error"], format="tex", filter=lambda run: run["limit"] >= 100
    ... )
    """

    def __init__(self, attributes=None, format="html", filter=None, **kwargs):
        if format not in self.get_supported_formats():
            raise ValueError(f"invalid format: {format}")
        self.attributes = list(attributes or [])
        self.output_format = format
        self.filter = filter
        self.filter_kwargs = kwargs

    def get_supported_formats(self):
        return list(txt2tags.TARGETS)

    def __call__(self, eval_dir, outfile):
        """Read ``<eval_dir>/properties`` and write the report to *outfile*."""
        self.eval_dir = Path(eval_dir).resolve()
        self.outfile = Path(outfile).resolve()
        self.props = tools.Properties(self.eval_dir / "properties")
        if not self.props:
            logging.critical(f"No properties found in {self.eval_dir}")
        tools.filter_runs(self.props, self.filter, **self.filter_kwargs)
        if not self.props:
            logging.critical("All runs have been filtered -> Nothing to report.")
        if not self.attributes:
            self.attributes = self._get_numerical_attributes()
            logging.info(f"Using all numerical attributes: {self.attributes}")
        self.write()

    def _get_numerical_attributes(self):
        return tools.natural_sort(
            {
                key
                for run in self.props.values()
                for key, value in run.items()
                if isinstance(value, (int, float)) and not isinstance(value, bool)
            }
        )

    def get_table(self):
        table = Table(title="run", columns=self.attributes)
        for name, run in self.props.items():
            table.add_row(name, {attr: run.get(attr) for attr in self.attributes})
        return table

    def get_text(self):
        doc = Document(title=self.outfile.stem)
        doc.add_text(str(self.get_table()))
        return doc.render(self.output_format)

    def write(self):
        self.outfile.parent.mkdir(parents=True, exist_ok=True)
        self.outfile.write_text(self.get_text())
        logging.info(f"Wrote file://{self.outfile}")


class ConvergenceReport(Report):
    """
    Table with one row per iteration count.

    >>> ConvergenceReport(format="txt").attributes
    ['pi', 'error', 'bound', 'within_bound']
    """

    DEFAULT_ATTRIBUTES = ["pi", "error", "bound", "within_bound"]

    def __init__(self, attributes=None, digits=4, **kwargs):
        Report.__init__(self, attributes or self.DEFAULT_ATTRIBUTES, **kwargs)
        self.digits = digits

    def get_table(self):
        table = Table(title="limit", columns=self.attributes, digits=self.digits)
        for run in self.props.values():
            table.add_row(str(run["limit"]), run)
        return table
