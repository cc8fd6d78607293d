"""Default settings for the conversion engine and shell."""

from dataclasses import dataclass

from asciigrid.charsets import DIGITS
from asciigrid.glyphs import BITMAP_SIZE, DEFAULT_FONT_SIZE
from asciigrid.matcher import Policy
from asciigrid.padding import WHITE


@dataclass
class Settings:
    resolution: int = 2
    policy: Policy = Policy.NEAREST
    alphabet: str = DIGITS

    # Glyph rasterization
    font_path: str | None = None  # None uses Pillow's bundled font
    font_size: int = DEFAULT_FONT_SIZE
    bitmap_size: int = BITMAP_SIZE

    # Padding
    background: tuple[int, int, int] = WHITE

    # HTML output
    html_path: str = "out.html"
    html_font: str = "Courier New"
