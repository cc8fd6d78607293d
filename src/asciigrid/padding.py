from pathlib import Path

import numpy as np
from PIL import Image

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)


def load_image(image: Image.Image | np.ndarray | str | Path) -> np.ndarray:
    """Return an image as a read-only (height, width, 3) uint8 RGB array."""
    if isinstance(image, np.ndarray):
        arr = image
        if arr.ndim == 2:
            arr = np.repeat(arr[:, :, None], 3, axis=2)
        arr = arr.astype(np.uint8, copy=False)
    else:
        if not isinstance(image, Image.Image):
            image = Image.open(image)
        arr = np.asarray(image.convert("RGB"), dtype=np.uint8)
    if arr.shape[0] < 1 or arr.shape[1] < 1:
        raise ValueError(f"Image must be at least 1x1, got {arr.shape[1]}x{arr.shape[0]}")
    arr = arr.view()
    arr.flags.writeable = False
    return arr


def next_power_of_two(n: int) -> int:
    power = 1
    while power < n:
        power *= 2
    return power


def is_power_of_two(n: int) -> bool:
    return n >= 1 and n & (n - 1) == 0


def pad_image(image: np.ndarray, background: tuple[int, int, int] = WHITE) -> np.ndarray:
    """Center an image on a canvas whose sides are the next powers of two.

    Returns the input array itself when both sides are already powers of two.
    """
    h, w = image.shape[:2]
    new_w = next_power_of_two(w)
    new_h = next_power_of_two(h)
    if new_w == w and new_h == h:
        return image

    canvas = np.empty((new_h, new_w, 3), dtype=np.uint8)
    canvas[:, :] = background
    top = (new_h - h) // 2
    left = (new_w - w) // 2
    canvas[top : top + h, left : left + w] = image
    canvas.flags.writeable = False
    return canvas
