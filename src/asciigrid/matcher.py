import math
from collections.abc import Mapping
from enum import Enum

import numpy as np

from asciigrid.errors import AlphabetTooSmall, UnmatchedPolicyConstraint


class Policy(Enum):
    """How a cell's brightness is rounded onto the glyph table."""

    NEAREST = "abs"
    AT_OR_ABOVE = "up"
    AT_OR_BELOW = "down"

    @classmethod
    def parse(cls, text: str) -> "Policy":
        key = text.strip().lower().replace("-", "_")
        for policy in cls:
            if key in (policy.value, policy.name.lower()):
                return policy
        raise ValueError(f"Unknown rounding policy: {text!r}")


def _ordered(table: Mapping[str, float]) -> list[tuple[str, float]]:
    if len(table) < 2:
        raise AlphabetTooSmall(len(table))
    return sorted(table.items(), key=lambda item: ord(item[0]))


def _admits(policy: Policy, glyph_value: float, brightness: float) -> bool:
    match policy:
        case Policy.NEAREST:
            return True
        case Policy.AT_OR_ABOVE:
            return glyph_value >= brightness
        case Policy.AT_OR_BELOW:
            return glyph_value <= brightness


def match_glyph(brightness: float, table: Mapping[str, float], policy: Policy = Policy.NEAREST) -> str:
    """Return the glyph whose normalized brightness is closest to `brightness`.

    Glyphs are scanned in ordinal order and only a strictly smaller difference
    replaces the current best, so ties go to the lowest ordinal.
    """
    best_glyph = None
    best_diff = math.inf
    for glyph, value in _ordered(table):
        if not _admits(policy, value, brightness):
            continue
        diff = abs(value - brightness)
        if diff < best_diff:
            best_diff = diff
            best_glyph = glyph
    if best_glyph is None:
        raise UnmatchedPolicyConstraint(brightness, policy)
    return best_glyph


def match_grid(grid: np.ndarray, table: Mapping[str, float], policy: Policy = Policy.NEAREST) -> list[str]:
    """Match every cell of a (rows, cols) brightness grid. Returns one string per row."""
    ordered = _ordered(table)
    glyphs = np.array([glyph for glyph, _ in ordered])
    values = np.array([value for _, value in ordered])

    cells = grid[..., np.newaxis]  # (rows, cols, 1) against (num_glyphs,)
    diffs = np.abs(values - cells)
    match policy:
        case Policy.NEAREST:
            pass
        case Policy.AT_OR_ABOVE:
            diffs = np.where(values >= cells, diffs, np.inf)
        case Policy.AT_OR_BELOW:
            diffs = np.where(values <= cells, diffs, np.inf)

    unmatched = np.isinf(diffs).all(axis=-1)
    if unmatched.any():
        row, col = np.argwhere(unmatched)[0]
        raise UnmatchedPolicyConstraint(float(grid[row, col]), policy)

    # argmin returns the first minimum, i.e. the lowest ordinal on ties
    indices = diffs.argmin(axis=-1)
    return ["".join(row) for row in glyphs[indices]]
