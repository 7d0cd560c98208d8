import logging

import cv2
import numpy as np

from labelscan.domain.entities.image import STRATEGIES, ProcessedImage, RawImage


logger = logging.getLogger(__name__)

LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114])

MIN_WIDTH = 800
UPSCALE_WIDTH = 1200
MAX_WIDTH = 3000
DOWNSCALE_WIDTH = 2000

GRAYSCALE_CONTRAST = 1.5
HIGH_CONTRAST = 2.0
HIGH_CONTRAST_THRESHOLD = 140
ADAPTIVE_RADIUS = 15  # 31x31 window
ADAPTIVE_C = 10


def luma(pixels: np.ndarray) -> np.ndarray:
    return pixels[..., :3].astype(np.float64) @ LUMA_WEIGHTS


def adjust_contrast(gray: np.ndarray, factor: float) -> np.ndarray:
    return (gray - 127.5) * factor + 127.5


def scale_factor(width: int) -> float:
    """Recognition needs a minimum resolution but wastes time above it."""
    if width < MIN_WIDTH:
        return UPSCALE_WIDTH / width
    if width > MAX_WIDTH:
        return DOWNSCALE_WIDTH / width
    return 1.0


class ImagePreprocessor:
    """Produces one resized, filtered RGBA buffer per named strategy."""

    def preprocess(self, image: RawImage, strategy: str) -> ProcessedImage:
        if strategy not in STRATEGIES:
            raise ValueError(f"Unknown preprocessing strategy: {strategy}")

        pixels = self._resize(image)
        if strategy == "grayscale":
            self._grayscale(pixels)
        elif strategy == "highContrast":
            self._high_contrast(pixels)
        elif strategy == "adaptive":
            self._adaptive(pixels)
        elif strategy == "invert":
            pixels[..., :3] = 255 - pixels[..., :3]

        logger.debug(
            "Preprocessed %dx%d -> %dx%d with %s",
            image.width, image.height, pixels.shape[1], pixels.shape[0], strategy,
        )
        return ProcessedImage(strategy=strategy, pixels=pixels)

    def _resize(self, image: RawImage) -> np.ndarray:
        scale = scale_factor(image.width)
        if scale == 1.0:
            return image.copy_pixels()

        width = max(1, int(image.width * scale))
        height = max(1, int(image.height * scale))
        interpolation = cv2.INTER_CUBIC if scale > 1 else cv2.INTER_AREA
        # cv2.resize always allocates a new buffer, the source stays untouched
        return cv2.resize(image.pixels, (width, height), interpolation=interpolation)

    def _write_gray(self, pixels: np.ndarray, values: np.ndarray):
        gray = np.rint(np.clip(values, 0, 255)).astype(np.uint8)
        pixels[..., 0] = gray
        pixels[..., 1] = gray
        pixels[..., 2] = gray

    def _grayscale(self, pixels: np.ndarray):
        self._write_gray(pixels, adjust_contrast(luma(pixels), GRAYSCALE_CONTRAST))

    def _high_contrast(self, pixels: np.ndarray):
        adjusted = adjust_contrast(luma(pixels), HIGH_CONTRAST)
        self._write_gray(pixels, np.where(adjusted >= HIGH_CONTRAST_THRESHOLD, 255, 0))

    def _adaptive(self, pixels: np.ndarray):
        self._write_gray(pixels, adaptive_threshold(luma(pixels)))


def adaptive_threshold(
    gray: np.ndarray, radius: int = ADAPTIVE_RADIUS, c: float = ADAPTIVE_C
) -> np.ndarray:
    """Local-mean threshold over a (2r+1)^2 window clipped at the borders.

    Window sums come from a summed-area table, so the cost is O(W*H)
    regardless of the window size.
    """
    height, width = gray.shape
    integral = cv2.integral(gray.astype(np.float64), sdepth=cv2.CV_64F)

    rows = np.arange(height)
    cols = np.arange(width)
    top = np.clip(rows - radius, 0, height)
    bottom = np.clip(rows + radius + 1, 0, height)
    left = np.clip(cols - radius, 0, width)
    right = np.clip(cols + radius + 1, 0, width)

    sums = (
        integral[np.ix_(bottom, right)]
        - integral[np.ix_(top, right)]
        - integral[np.ix_(bottom, left)]
        + integral[np.ix_(top, left)]
    )
    counts = np.outer(bottom - top, right - left)
    mean = sums / counts

    return np.where(gray > mean - c, 255, 0).astype(np.uint8)
