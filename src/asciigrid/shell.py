import logging
import sys
from collections.abc import Callable
from typing import TextIO

from asciigrid.charsets import parse_glyphs
from asciigrid.engine import AsciiArtEngine
from asciigrid.errors import AlphabetTooSmall, InvalidResolution, UnmatchedPolicyConstraint
from asciigrid.matcher import Policy
from asciigrid.output import ConsoleOutput, HtmlOutput, Output

log = logging.getLogger(__name__)

PROMPT = ">>> "

RES_FORMAT_ERROR = "Did not change resolution due to incorrect format."
RES_BOUNDARIES_ERROR = "Did not change resolution due to exceeding boundaries."
RES_CHANGED = "Resolution set to {}."
ADD_ERROR = "Did not add due to incorrect format."
REMOVE_ERROR = "Did not remove due to incorrect format."
ROUND_ERROR = "Did not change rounding method due to incorrect format."
OUTPUT_ERROR = "Did not change output method due to incorrect format."
CHARSET_TOO_SMALL = "Did not execute. Charset is too small."
UNMATCHED_ERROR = "Did not execute. No character satisfies the rounding method."
COMMAND_ERROR = "Did not execute due to incorrect command."


class Shell:
    """Line-oriented command interpreter driving an AsciiArtEngine."""

    def __init__(self, engine: AsciiArtEngine, output: Output | None = None, stdout: TextIO | None = None):
        self.engine = engine
        self.stdout = stdout if stdout is not None else sys.stdout
        self.output = output if output is not None else ConsoleOutput(self.stdout)
        self._commands: dict[str, Callable[[str | None], None]] = {
            "chars": self._chars,
            "add": self._add,
            "remove": self._remove,
            "res": self._res,
            "round": self._round,
            "output": self._output,
            "asciiArt": self._ascii_art,
        }

    def _say(self, message: str) -> None:
        print(message, file=self.stdout)

    def run(self, read_line: Callable[[str], str] = input) -> None:
        while True:
            try:
                line = read_line(PROMPT)
            except EOFError:
                return
            if not self.execute(line):
                return

    def execute(self, line: str) -> bool:
        """Run one command line. Returns False when the shell should exit."""
        parts = line.split()
        if not parts:
            return True
        name, arg = parts[0], (parts[1] if len(parts) > 1 else None)
        if name == "exit":
            return False
        handler = self._commands.get(name)
        if handler is None:
            self._say(COMMAND_ERROR)
        else:
            handler(arg)
        return True

    def _chars(self, arg: str | None) -> None:
        self._say(" ".join(sorted(self.engine.alphabet)))

    def _add(self, arg: str | None) -> None:
        try:
            self.engine.add_glyphs(parse_glyphs(arg or ""))
        except ValueError:
            self._say(ADD_ERROR)

    def _remove(self, arg: str | None) -> None:
        try:
            self.engine.remove_glyphs(parse_glyphs(arg or ""))
        except ValueError:
            self._say(REMOVE_ERROR)

    def _res(self, arg: str | None) -> None:
        if arg is None:
            self._say(RES_CHANGED.format(self.engine.resolution))
            return
        if arg == "up":
            resolution = self.engine.resolution * 2
        elif arg == "down":
            resolution = self.engine.resolution // 2
        else:
            self._say(RES_FORMAT_ERROR)
            return
        try:
            self.engine.set_resolution(resolution)
        except InvalidResolution:
            self._say(RES_BOUNDARIES_ERROR)
            return
        self._say(RES_CHANGED.format(resolution))

    def _round(self, arg: str | None) -> None:
        if arg not in {policy.value for policy in Policy}:
            self._say(ROUND_ERROR)
            return
        self.engine.policy = Policy(arg)

    def _output(self, arg: str | None) -> None:
        settings = self.engine.settings
        if arg == "console":
            self.output = ConsoleOutput(self.stdout)
        elif arg == "html":
            self.output = HtmlOutput(settings.html_path, settings.html_font)
        else:
            self._say(OUTPUT_ERROR)

    def _ascii_art(self, arg: str | None) -> None:
        try:
            art = self.engine.run()
        except AlphabetTooSmall:
            self._say(CHARSET_TOO_SMALL)
            return
        except InvalidResolution:
            self._say(RES_BOUNDARIES_ERROR)
            return
        except UnmatchedPolicyConstraint as e:
            log.debug("%s", e)
            self._say(UNMATCHED_ERROR)
            return
        self.output.write(art.to_canvas())
