import argparse
import logging

import pytest

from piseries import tools


def test_natural_sort():
    assert tools.natural_sort(["limit-800", "limit-10", "limit-2"]) == [
        "limit-2",
        "limit-10",
        "limit-800",
    ]


def test_properties_roundtrip(tmp_path):
    path = tmp_path / "eval" / "properties"
    props = tools.Properties(filename=path)
    assert not props
    props["limit-1"] = {"id": ["limit-1"], "pi": 4.0, "path": tmp_path}
    props.write()
    loaded = tools.Properties(filename=path)
    assert loaded["limit-1"]["pi"] == 4.0
    assert loaded["limit-1"]["path"] == str(tmp_path)


def test_properties_sorted_keys(tmp_path):
    props = tools.Properties(filename=tmp_path / "properties")
    props["b"] = 2
    props["a"] = 1
    assert str(props) == '{\n  "a": 1,\n  "b": 2\n}'


def test_properties_parse_error(tmp_path, caplog):
    path = tmp_path / "properties"
    path.write_text("{not json")
    with caplog.at_level(logging.CRITICAL):
        props = tools.Properties(filename=path)
    assert not props
    assert "JSON parse error" in caplog.text


def make_runs():
    return {
        f"limit-{limit}": {"id": [f"limit-{limit}"], "limit": limit}
        for limit in [1, 2, 3]
    }


def test_filter_runs():
    props = make_runs()
    tools.filter_runs(props, lambda run: run["limit"] > 1, filter_limit=[1, 3])
    assert list(props) == ["limit-3"]


def test_filter_runs_single_value():
    props = make_runs()
    tools.filter_runs(props, filter_limit=2)
    assert list(props) == ["limit-2"]


def test_filter_runs_renames_runs():
    def rename(run):
        return dict(run, id=["renamed"])

    props = {"limit-1": {"id": ["limit-1"], "limit": 1}}
    tools.filter_runs(props, [rename])
    assert list(props) == ["renamed"]


def test_filter_runs_rejects_bad_results():
    with pytest.raises(TypeError):
        tools.filter_runs(make_runs(), lambda run: run["limit"])


def test_filter_runs_rejects_bad_keyword():
    with pytest.raises(ValueError):
        tools.filter_runs(make_runs(), limit=1)


@pytest.mark.parametrize("text, value", [("0", 0), ("800", 800)])
def test_non_negative_int(text, value):
    assert tools.non_negative_int(text) == value


@pytest.mark.parametrize("text", ["-1", "pi", "2.5"])
def test_non_negative_int_invalid(text):
    with pytest.raises(argparse.ArgumentTypeError):
        tools.non_negative_int(text)


@pytest.mark.parametrize(
    "text, limits", [("800", [800]), ("1,10,800", [1, 10, 800]), ("1, 2,", [1, 2])]
)
def test_limit_list(text, limits):
    assert tools.limit_list(text) == limits


@pytest.mark.parametrize("text", ["", ",", "1,x", "1,-2"])
def test_limit_list_invalid(text):
    with pytest.raises(argparse.ArgumentTypeError):
        tools.limit_list(text)


def test_help_shows_defaults(capsys):
    parser = tools.get_argument_parser(description="Line one.\n  Line two.")
    parser.add_argument("--limit", default=800, help="number of terms")
    parser.print_help()
    out = capsys.readouterr().out
    assert "(default: 800)" in out
    assert "  Line two." in out


def test_configure_logging_aborts_on_critical():
    root_logger = logging.getLogger("")
    handlers = root_logger.handlers[:]
    level = root_logger.level
    try:
        tools.configure_logging(logging.DEBUG)
        assert root_logger.level == logging.DEBUG
        assert len(root_logger.handlers) == 2
        with pytest.raises(SystemExit):
            logging.critical("fatal")
    finally:
        root_logger.handlers[:] = handlers
        root_logger.setLevel(level)
