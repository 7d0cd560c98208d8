from dataclasses import dataclass

import numpy as np


STRATEGIES = ("original", "grayscale", "highContrast", "adaptive", "invert")


@dataclass(frozen=True)
class RawImage:
    """Decoded RGBA pixels. The buffer is read-only; use copy_pixels() to transform."""

    width: int
    height: int
    pixels: np.ndarray

    def __post_init__(self):
        self._validate()
        self.pixels.setflags(write=False)

    def _validate(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Image dimensions must be positive")

        if self.pixels.shape != (self.height, self.width, 4):
            raise ValueError(
                f"Pixel buffer shape {self.pixels.shape} does not match "
                f"{self.height}x{self.width}x4"
            )

        if self.pixels.dtype != np.uint8:
            raise ValueError("Pixel buffer must be uint8")

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> "RawImage":
        buffer = np.ascontiguousarray(pixels, dtype=np.uint8).copy()
        return cls(width=buffer.shape[1], height=buffer.shape[0], pixels=buffer)

    def copy_pixels(self) -> np.ndarray:
        return self.pixels.copy()


@dataclass
class ProcessedImage:
    strategy: str
    pixels: np.ndarray

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]
