from __future__ import annotations
from dataclasses import dataclass
import math
from typing import Tuple, Union

Color = Tuple[int, int, int]

WHITE: Color = (255, 255, 255)
BLACK: Color = (0, 0, 0)

_CHANNELS = ("red", "green", "blue")


def clamp_channel(value) -> int:
    """Truncate to int and clamp into the 8-bit range."""
    return max(0, min(255, int(value)))


@dataclass
class Pixel:
    """
    Simple data object: one RGB color, every channel kept in [0, 255].
    Pixels handed out by a Picture are copies, write them back with set_pixel.
    """
    red: int = 0
    green: int = 0
    blue: int = 0

    def __setattr__(self, name, value):
        if name in _CHANNELS:
            value = clamp_channel(value)
        super().__setattr__(name, value)

    @classmethod
    def from_color(cls, color: Union["Pixel", Color]) -> "Pixel":
        if isinstance(color, Pixel):
            return cls(color.red, color.green, color.blue)
        red, green, blue = color
        return cls(red, green, blue)

    def get_color(self) -> Color:
        return self.red, self.green, self.blue

    def set_color(self, red, green, blue) -> None:
        self.red = red
        self.green = green
        self.blue = blue

    def color_distance(self, other: Union["Pixel", Color]) -> float:
        """Euclidean distance between the two colors in RGB space."""
        r, g, b = other.get_color() if isinstance(other, Pixel) else other
        return math.sqrt((self.red - r) ** 2 + (self.green - g) ** 2 + (self.blue - b) ** 2)
