import numpy as np
from PIL import Image, ImageDraw, ImageFont

BITMAP_SIZE = 16
DEFAULT_FONT_SIZE = 14


class GlyphRasterizer:
    """Renders single glyphs into square black-and-white coverage bitmaps."""

    def __init__(self, font_path: str | None = None, font_size: int = DEFAULT_FONT_SIZE, bitmap_size: int = BITMAP_SIZE):
        if font_path is None:
            self.font = ImageFont.load_default(size=font_size)
        else:
            self.font = ImageFont.truetype(font_path, font_size)
        self.bitmap_size = bitmap_size
        self._bitmaps: dict[str, np.ndarray] = {}

    def bitmap(self, glyph: str) -> np.ndarray:
        """Boolean (bitmap_size, bitmap_size) mask of the pixels the glyph covers."""
        if glyph not in self._bitmaps:
            self._bitmaps[glyph] = self._render(glyph)
        return self._bitmaps[glyph]

    def coverage(self, glyph: str) -> float:
        """Fraction of the bitmap covered by the glyph, in [0, 1]."""
        mask = self.bitmap(glyph)
        return int(mask.sum()) / mask.size

    def _render(self, glyph: str) -> np.ndarray:
        size = self.bitmap_size
        # Mode "1" draws without antialiasing
        img = Image.new("1", (size, size), 0)
        draw = ImageDraw.Draw(img)
        left, top, right, bottom = draw.textbbox((0, 0), glyph, font=self.font)
        x_offset = (size - (right - left)) // 2 - left
        y_offset = (size - (bottom - top)) // 2 - top
        draw.text((x_offset, y_offset), glyph, fill=1, font=self.font)
        mask = np.asarray(img, dtype=bool).copy()
        mask.flags.writeable = False
        return mask
