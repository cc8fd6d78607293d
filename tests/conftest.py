import shutil
import subprocess

import numpy as np
import pytest

_FONT_CANDIDATES = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
    "/usr/share/fonts/TTF/DejaVuSansMono.ttf",
    "/usr/share/fonts/dejavu-sans-mono-fonts/DejaVuSansMono.ttf",
]


def _find_monospace_font():
    """Find a monospace font on the system."""
    for path in _FONT_CANDIDATES:
        if shutil.os.path.exists(path):
            return path
    result = shutil.which("fc-match")
    if result:
        out = subprocess.run(["fc-match", "-f", "%{file}", "monospace"], capture_output=True, text=True)
        if out.returncode == 0 and out.stdout.strip():
            return out.stdout.strip()
    return None


FONT_PATH = _find_monospace_font()
needs_font = pytest.mark.skipif(FONT_PATH is None, reason="No monospace font found on system")

# Coverage ratios for the digits; '8' is the densest, '1' the sparsest
DIGIT_COVERAGE = {
    "0": 0.40,
    "1": 0.15,
    "2": 0.30,
    "3": 0.30,
    "4": 0.28,
    "5": 0.32,
    "6": 0.38,
    "7": 0.20,
    "8": 0.45,
    "9": 0.38,
}


class CountingCoverage:
    """Fake glyph coverage that records which glyphs were measured."""

    def __init__(self, table=None):
        self.table = DIGIT_COVERAGE if table is None else table
        self.calls = []

    def __call__(self, glyph):
        self.calls.append(glyph)
        if glyph in self.table:
            return self.table[glyph]
        return (ord(glyph) % 17) / 16


@pytest.fixture
def coverage():
    return CountingCoverage()


def solid(width, height, colour):
    img = np.empty((height, width, 3), dtype=np.uint8)
    img[:, :] = colour
    return img
