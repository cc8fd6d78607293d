import logging
from dataclasses import dataclass

import numpy as np

from asciigrid.errors import InvalidResolution
from asciigrid.padding import next_power_of_two

log = logging.getLogger(__name__)

# Rec. 709 luma coefficients for R, G, B
LUMINANCE_WEIGHTS = np.array([0.2126, 0.7152, 0.0722])
MAX_CHANNEL = 255


@dataclass(frozen=True, eq=False)
class Partition:
    """Square cells of a padded image in row-major order, with their luminance."""

    resolution: int
    cell_size: int
    cells: np.ndarray  # (rows, cols, cell_size, cell_size, 3) uint8
    brightness: np.ndarray  # (rows, cols) float64 in [0, 1]

    @property
    def rows(self) -> int:
        return self.brightness.shape[0]

    @property
    def cols(self) -> int:
        return self.brightness.shape[1]

    def __len__(self) -> int:
        return self.rows * self.cols

    def cell(self, index: int) -> np.ndarray:
        """Pixels of the cell at a row-major index."""
        row, col = divmod(index, self.cols)
        return self.cells[row, col]

    def cell_brightness(self, index: int) -> float:
        row, col = divmod(index, self.cols)
        return float(self.brightness[row, col])


def resolution_bounds(width: int, height: int) -> tuple[int, int]:
    """Smallest and largest usable resolution for an image of the given size.

    The lower bound also keeps the square cells of the padded image no taller
    than the padded height, so every resolution in range yields at least one row.
    """
    padded_width = next_power_of_two(width)
    padded_height = next_power_of_two(height)
    # padded_width // resolution <= padded_height
    fits = padded_width // (padded_height + 1) + 1
    return max(1, width // height, fits), width


def check_resolution(resolution: int, width: int, height: int) -> None:
    minimum, maximum = resolution_bounds(width, height)
    if not minimum <= resolution <= maximum:
        raise InvalidResolution(resolution, minimum, maximum)


def cell_luminance(pixels: np.ndarray) -> float:
    """Mean weighted luminance of an RGB pixel block, scaled to [0, 1]."""
    pixels = np.asarray(pixels, dtype=np.float64).reshape(-1, 3)
    value = (pixels @ LUMINANCE_WEIGHTS).sum() / (len(pixels) * MAX_CHANNEL)
    return float(np.clip(value, 0.0, 1.0))


def partition_image(padded: np.ndarray, resolution: int) -> Partition:
    """Split a padded image into `resolution` columns of square cells.

    Pixels left over when the width or height is not a multiple of the cell
    size are dropped.
    """
    height, width = padded.shape[:2]
    if not 1 <= resolution <= width:
        raise InvalidResolution(resolution, 1, width)
    cell = width // resolution
    rows = height // cell
    if rows == 0:
        raise InvalidResolution(resolution, *resolution_bounds(width, height))

    trimmed = padded[: rows * cell, : resolution * cell]
    # (rows, cell, cols, cell, 3) -> (rows, cols, cell, cell, 3)
    cells = trimmed.reshape(rows, cell, resolution, cell, 3).transpose(0, 2, 1, 3, 4)
    cells = np.ascontiguousarray(cells)
    cells.flags.writeable = False

    luma = cells.astype(np.float64) @ LUMINANCE_WEIGHTS  # (rows, cols, cell, cell)
    brightness = np.clip(luma.sum(axis=(2, 3)) / (cell * cell * MAX_CHANNEL), 0.0, 1.0)
    brightness.flags.writeable = False

    log.debug("Partitioned %dx%d image into %dx%d cells of %dpx", width, height, rows, resolution, cell)
    return Partition(resolution=resolution, cell_size=cell, cells=cells, brightness=brightness)
