from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from asciigrid.matcher import Policy


class AsciiGridError(ValueError):
    """Base class for errors raised by the conversion pipeline."""


class InvalidResolution(AsciiGridError):
    def __init__(self, resolution: int, minimum: int, maximum: int):
        super().__init__(f"Resolution {resolution} outside [{minimum}, {maximum}]")
        self.resolution = resolution
        self.minimum = minimum
        self.maximum = maximum


class AlphabetTooSmall(AsciiGridError):
    def __init__(self, size: int):
        super().__init__(f"Alphabet has {size} glyph(s), need at least 2")
        self.size = size


class UnmatchedPolicyConstraint(AsciiGridError):
    def __init__(self, brightness: float, policy: Policy):
        super().__init__(f"No glyph satisfies policy {policy.name} for brightness {brightness:.4f}")
        self.brightness = brightness
        self.policy = policy
