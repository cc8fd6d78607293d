import html
import logging
import sys
from pathlib import Path
from typing import Protocol, TextIO

log = logging.getLogger(__name__)

_HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>ASCII Art</title>
</head>
<body>
<pre style="font-family: '{font}', monospace; font-size: 6pt; line-height: 1.0; letter-spacing: 0.2em;">
{body}
</pre>
</body>
</html>
"""


class Output(Protocol):
    def write(self, rows: list[str]) -> None:
        """Render a grid of glyphs, one string per row."""
        ...


class ConsoleOutput:
    def __init__(self, stream: TextIO | None = None):
        self.stream = stream

    def write(self, rows: list[str]) -> None:
        stream = self.stream if self.stream is not None else sys.stdout
        stream.write("\n".join(rows) + "\n")


class HtmlOutput:
    """Writes the grid to an HTML file in a fixed monospace font."""

    def __init__(self, path: str | Path = "out.html", font: str = "Courier New"):
        self.path = Path(path)
        self.font = font

    def write(self, rows: list[str]) -> None:
        body = "\n".join(html.escape(row) for row in rows)
        self.path.write_text(_HTML_TEMPLATE.format(font=html.escape(self.font), body=body), encoding="utf-8")
        log.debug("Wrote %d rows to %s", len(rows), self.path)
