from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image

from asciigrid.brightness import BrightnessTable
from asciigrid.cache import RunCache
from asciigrid.config import Settings
from asciigrid.errors import AlphabetTooSmall
from asciigrid.glyphs import GlyphRasterizer
from asciigrid.matcher import Policy, match_grid
from asciigrid.padding import load_image, pad_image
from asciigrid.partition import check_resolution, partition_image, resolution_bounds

log = logging.getLogger(__name__)


@dataclass
class AsciiArt:
    rows: list[str]  # one string per row of cells
    canvas_width: int
    canvas_height: int

    def to_canvas(self, blank: str = " ") -> list[str]:
        """Lay the rows out on a grid the size of the padded image, centered."""
        num_rows = len(self.rows)
        num_cols = len(self.rows[0]) if self.rows else 0
        start_x = (self.canvas_width - num_cols) // 2
        start_y = (self.canvas_height - num_rows) // 2
        margin = blank * start_x
        tail = blank * (self.canvas_width - num_cols - start_x)
        canvas = [blank * self.canvas_width] * self.canvas_height
        for i, row in enumerate(self.rows):
            canvas[start_y + i] = margin + row + tail
        return canvas


class AsciiArtEngine:
    """Converts one image to glyph grids, reusing work between consecutive runs."""

    def __init__(
        self,
        image: Image.Image | np.ndarray | str | Path,
        settings: Settings | None = None,
        coverage: Callable[[str], float] | None = None,
    ):
        self.settings = settings if settings is not None else Settings()
        self.image = load_image(image)
        self.resolution = self.settings.resolution
        self.policy: Policy = self.settings.policy
        self.cache = RunCache()
        self._coverage = coverage
        self._padded: np.ndarray | None = None
        self.table = BrightnessTable(self._measure)
        self.add_glyphs(self.settings.alphabet)

    @property
    def width(self) -> int:
        return self.image.shape[1]

    @property
    def height(self) -> int:
        return self.image.shape[0]

    @property
    def padded(self) -> np.ndarray:
        if self._padded is None:
            self._padded = pad_image(self.image, self.settings.background)
        return self._padded

    @property
    def coverage(self) -> Callable[[str], float]:
        if self._coverage is None:
            s = self.settings
            self._coverage = GlyphRasterizer(s.font_path, s.font_size, s.bitmap_size).coverage
        return self._coverage

    @property
    def alphabet(self) -> frozenset[str]:
        return self.table.glyphs

    def _measure(self, glyph: str) -> float:
        return self.coverage(glyph)

    def resolution_bounds(self) -> tuple[int, int]:
        return resolution_bounds(self.width, self.height)

    def set_resolution(self, resolution: int) -> None:
        check_resolution(resolution, self.width, self.height)
        self.resolution = resolution

    def add_glyphs(self, glyphs: Iterable[str]) -> None:
        glyphs = list(glyphs)
        for glyph in glyphs:
            if len(glyph) != 1:
                raise ValueError(f"Glyphs must be single characters, got {glyph!r}")
        # Glyphs measured for an earlier run keep their raw coverage
        known = self.cache.try_reuse(self.resolution, glyphs).raw
        for glyph in glyphs:
            self.table.add(glyph, known.get(glyph))

    def remove_glyphs(self, glyphs: Iterable[str]) -> None:
        for glyph in glyphs:
            self.table.remove(glyph)

    def run(self) -> AsciiArt:
        if len(self.alphabet) < 2:
            raise AlphabetTooSmall(len(self.alphabet))
        check_resolution(self.resolution, self.width, self.height)

        reuse = self.cache.try_reuse(self.resolution, self.alphabet)
        partition = reuse.partition
        if partition is None:
            partition = partition_image(self.padded, self.resolution)
        table = reuse.table
        if table is None:
            self.table.normalize()
            table = self.table.snapshot()

        rows = match_grid(partition.brightness, table.normalized, self.policy)
        self.cache.store(self.resolution, partition, self.alphabet, table)
        log.debug("Rendered %d rows of %d glyphs", partition.rows, partition.cols)
        height, width = self.padded.shape[:2]
        return AsciiArt(rows=rows, canvas_width=width, canvas_height=height)
