import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from asciigrid.glyphs import GlyphRasterizer

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableSnapshot:
    """Read-only copy of a brightness table's contents."""

    glyphs: frozenset[str]
    raw: Mapping[str, float]
    normalized: Mapping[str, float]


class BrightnessTable:
    """Raw coverage ratios of an alphabet's glyphs, min-max normalized to [0, 1].

    Adding a glyph whose raw value falls inside the current range, or removing
    one that is not an extreme, updates the table in place. Anything that moves
    the minimum or maximum marks the table stale until `normalize()` runs.
    """

    def __init__(self, coverage: Callable[[str], float] | None = None):
        self._coverage = coverage
        self.raw: dict[str, float] = {}
        self.normalized: dict[str, float] = {}
        self.min: float | None = None
        self.max: float | None = None
        self.stale = False

    @classmethod
    def from_glyphs(
        cls,
        glyphs: Iterable[str],
        coverage: Callable[[str], float] | None = None,
        known: Mapping[str, float] | None = None,
    ) -> "BrightnessTable":
        """Build and normalize a table, taking raw values from `known` where available."""
        known = known or {}
        table = cls(coverage)
        for glyph in sorted(set(glyphs)):
            table.add(glyph, known.get(glyph))
        table.normalize()
        return table

    @property
    def glyphs(self) -> frozenset[str]:
        return frozenset(self.raw)

    def __len__(self) -> int:
        return len(self.raw)

    def __contains__(self, glyph: str) -> bool:
        return glyph in self.raw

    def brightness(self, glyph: str) -> float:
        if self._coverage is None:
            self._coverage = GlyphRasterizer().coverage
        return self._coverage(glyph)

    def add(self, glyph: str, raw: float | None = None) -> None:
        if glyph in self.raw:
            return
        value = self.brightness(glyph) if raw is None else raw
        self.raw[glyph] = value
        if len(self.raw) == 1:
            self.min = self.max = value
            self.normalized[glyph] = 0.0
        elif value < self.min or value > self.max:
            self.min = min(self.min, value)
            self.max = max(self.max, value)
            self.stale = True
        elif not self.stale:
            self.normalized[glyph] = self._scale(value)

    def remove(self, glyph: str) -> None:
        if glyph not in self.raw:
            return
        value = self.raw.pop(glyph)
        self.normalized.pop(glyph, None)
        if not self.raw:
            self.min = self.max = None
            self.stale = False
        elif value == self.min or value == self.max:
            self.min = min(self.raw.values())
            self.max = max(self.raw.values())
            self.stale = True

    def normalize(self) -> None:
        if self.raw:
            self.min = min(self.raw.values())
            self.max = max(self.raw.values())
        else:
            self.min = self.max = None
        self.normalized = {glyph: self._scale(value) for glyph, value in self.raw.items()}
        self.stale = False
        log.debug("Normalized %d glyphs over raw range [%s, %s]", len(self.raw), self.min, self.max)

    def snapshot(self) -> TableSnapshot:
        if self.stale:
            self.normalize()
        return TableSnapshot(
            glyphs=self.glyphs,
            raw=MappingProxyType(dict(self.raw)),
            normalized=MappingProxyType(dict(self.normalized)),
        )

    def _scale(self, value: float) -> float:
        # A lone glyph, or an alphabet whose glyphs all cover the same area, sits at 0
        if self.max == self.min:
            return 0.0
        return (value - self.min) / (self.max - self.min)
