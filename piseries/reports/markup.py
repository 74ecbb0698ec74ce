"""Render txt2tags markup for convergence reports."""

import datetime
import logging

import txt2tags


# Placeholder for optional line breaks in long column names.
WORDBREAK = "xWBRx"

TABLE_STYLE = """\
<style type="text/css">
    body { font-family: Helvetica, Arial, sans-serif; }
    table { border-collapse: collapse; }
    td, th { padding: 2px 8px; }
</style>
"""


def escape(text):
    """Protect *text* from txt2tags markup interpretation."""
    return f'""{text}""'


def _postprocessing(target):
    if target == "html":
        return [
            [r"</head>", TABLE_STYLE + "</head>"],
            [WORDBREAK, "<wbr>"],
        ]
    return [[WORDBREAK, ""]]


class Document:
    """A titled txt2tags document.

    >>> doc = Document(title="convergence", date="2026-01-01")
    >>> doc.add_text("|| limit | pi |")
    >>> str(doc)
    '|| limit | pi |\\n'
    """

    def __init__(self, title="", date=""):
        self.title = title
        self.date = date or datetime.date.today().isoformat()
        self.text = ""

    def add_text(self, text):
        self.text += text + "\n"

    def __str__(self):
        return self.text

    def render(self, target, toc=False):
        config = {
            "infile": txt2tags.MODULEIN,
            "outfile": txt2tags.MODULEOUT,
            "target": target,
            "toc": int(toc),
            "preproc": [],
            "postproc": _postprocessing(target),
        }
        headers = [self.title, "", self.date]
        try:
            lines = txt2tags.convert_file(headers, self.text.split("\n"), config)
        except txt2tags.error as err:
            logging.error(f"Could not render {self.title!r} as {target}: {err}")
            return str(err)
        return "\n".join(lines)
