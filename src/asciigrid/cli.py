import argparse
import logging
import sys
from pathlib import Path

from asciigrid.charsets import DIGITS
from asciigrid.config import Settings
from asciigrid.engine import AsciiArtEngine
from asciigrid.errors import AsciiGridError
from asciigrid.glyphs import DEFAULT_FONT_SIZE
from asciigrid.matcher import Policy
from asciigrid.output import ConsoleOutput, HtmlOutput
from asciigrid.shell import Shell


def main():
    parser = argparse.ArgumentParser(description="Render an image as a grid of brightness-matched characters")
    parser.add_argument("image", help="Path to input image")
    parser.add_argument("-r", "--resolution", type=int, default=2, help="Characters per row (default: 2)")
    parser.add_argument(
        "-p",
        "--policy",
        type=Policy.parse,
        default=Policy.NEAREST,
        help="Rounding policy: abs, up or down (default: abs)",
    )
    parser.add_argument("-c", "--chars", default=DIGITS, help=f"Initial character set (default: {DIGITS})")
    parser.add_argument("--font", default=None, help="TrueType font used to measure characters (default: built-in)")
    parser.add_argument(
        "--font-size", type=int, default=DEFAULT_FONT_SIZE, help=f"Font size in points (default: {DEFAULT_FONT_SIZE})"
    )
    parser.add_argument("--html", default=None, help="Write HTML to this path instead of printing")
    parser.add_argument(
        "--once", action="store_true", default=False, help="Render once and exit instead of starting the shell"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(levelname)s: %(message)s")

    image_path = Path(args.image)
    if not image_path.exists():
        print(f"File not found: {image_path}", file=sys.stderr)
        sys.exit(1)

    settings = Settings(
        resolution=args.resolution,
        policy=args.policy,
        alphabet=args.chars,
        font_path=args.font,
        font_size=args.font_size,
    )
    if args.html is not None:
        settings.html_path = args.html
        output = HtmlOutput(settings.html_path, settings.html_font)
    else:
        output = ConsoleOutput()
    engine = AsciiArtEngine(image_path, settings)

    if not args.once:
        Shell(engine, output=output).run()
        return

    try:
        art = engine.run()
    except AsciiGridError as e:
        print(e, file=sys.stderr)
        sys.exit(1)
    output.write(art.to_canvas())
