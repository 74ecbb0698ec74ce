import argparse
import logging
from pathlib import Path
import re
import sys

import simplejson as json


LOG_FORMAT = "%(asctime)-s %(levelname)-8s %(message)s"


class _LevelRange(logging.Filter):
    def __init__(self, low, high):
        logging.Filter.__init__(self)
        self.low = low
        self.high = high

    def filter(self, record):
        return self.low <= record.levelno <= self.high


class _AbortingHandler(logging.StreamHandler):
    """Stop the program after emitting a CRITICAL record."""

    def emit(self, record):
        logging.StreamHandler.emit(self, record)
        if record.levelno >= logging.CRITICAL:
            sys.exit("aborting")


def configure_logging(level=logging.INFO):
    """Send info and warnings to stdout and errors to stderr.

    Critical messages terminate the program, so outer layers report
    fatal user errors with ``logging.critical()``.
    """
    root_logger = logging.getLogger("")
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT)
    for handler, levels in [
        (logging.StreamHandler(sys.stdout), (logging.NOTSET, logging.WARNING)),
        (_AbortingHandler(sys.stderr), (logging.WARNING + 1, logging.CRITICAL)),
    ]:
        handler.setFormatter(formatter)
        handler.addFilter(_LevelRange(*levels))
        root_logger.addHandler(handler)
    root_logger.setLevel(level)


def natural_sort(names):
    """Sort run names so that numbers compare by value.

    >>> natural_sort(["limit-10", "limit-2", "limit-800"])
    ['limit-2', 'limit-10', 'limit-800']
    """

    def key(name):
        return [
            int(part) if part.isdigit() else part.lower()
            for part in re.split("([0-9]+)", str(name))
        ]

    return sorted(names, key=key)


class Properties(dict):
    """Mapping from run names to run dictionaries, stored as JSON.

    If *filename* exists, its runs are loaded right away.
    """

    def __init__(self, filename=None):
        dict.__init__(self)
        self.path = Path(filename).resolve() if filename else None
        if self.path and self.path.is_file():
            self.load(self.path)

    def __str__(self):
        return json.dumps(self, indent=2, sort_keys=True, default=str)

    def load(self, filename):
        try:
            runs = json.loads(Path(filename).read_text())
        except ValueError as err:
            logging.critical(f"JSON parse error in file '{filename}': {err}")
        else:
            self.update(runs)

    def write(self):
        assert self.path, "properties need a filename to be written"
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(str(self))


def _attribute_filter(attribute, wanted):
    if isinstance(wanted, (list, tuple, set)):
        return lambda run: run.get(attribute) in wanted
    return lambda run: run.get(attribute) == wanted


def filter_runs(props, filters=None, **kwargs):
    """Filter the runs in *props* in place.

    *filters* is a function or a list of functions taking a run. A filter
    returns a bool to keep or drop the run, or a dictionary that replaces
    it. Keyword arguments ``filter_<attribute>=value`` keep the runs whose
    attribute equals *value* (or is contained in it, for lists). They are
    applied after *filters*.

    >>> props = {"limit-1": {"limit": 1}, "limit-9": {"limit": 9}}
    >>> filter_runs(props, filter_limit=9)
    >>> list(props)
    ['limit-9']
    """
    if filters is None:
        filters = []
    elif callable(filters):
        filters = [filters]
    filters = list(filters)
    for name, wanted in kwargs.items():
        if not name.startswith("filter_"):
            raise ValueError(f'invalid filter keyword argument "{name}"')
        attribute = name[len("filter_") :]
        if not any(attribute in run for run in props.values()):
            logging.warning(f'No run has the attribute "{attribute}"')
        filters.append(_attribute_filter(attribute, wanted))

    for filter_ in filters:
        for name, run in list(props.items()):
            del props[name]
            result = filter_(run)
            if not isinstance(result, (bool, dict)):
                raise TypeError("filters must return a bool or a dictionary")
            if not result:
                continue
            if isinstance(result, dict):
                run = result
            # Filters may rename a run by changing its id.
            props["-".join(run["id"]) if "id" in run else name] = run


class HelpFormatter(
    argparse.RawDescriptionHelpFormatter, argparse.ArgumentDefaultsHelpFormatter
):
    """Keep docstring layout in descriptions and show default values."""


def get_argument_parser(description=None):
    return argparse.ArgumentParser(
        description=description, formatter_class=HelpFormatter
    )


def non_negative_int(text):
    """Argparse type for a single iteration count."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value}")
    return value


def limit_list(text):
    """Argparse type for comma-separated iteration counts.

    >>> limit_list("1,10,800")
    [1, 10, 800]
    """
    limits = [non_negative_int(part) for part in text.split(",") if part.strip()]
    if not limits:
        raise argparse.ArgumentTypeError("expected at least one iteration count")
    return limits
