from __future__ import annotations
from typing import Optional, Sequence
import os

import cv2
import numpy as np
from dotenv import load_dotenv

load_dotenv()

STEGO_DARK_THRESHOLD = int(os.getenv("STEGO_DARK_THRESHOLD", "30"))


class FilterRepository:
    """
    Pixel kernels over (H, W, 3) uint8 RGB arrays.

    • Every method returns a **new** array, the input is never written to.
    • No Picture objects here, callers decide what to do with the result.
    """

    # ---------- private helpers ----------
    @staticmethod
    def _as_int(pixels: np.ndarray) -> np.ndarray:
        return pixels.astype(np.int32)

    @staticmethod
    def _to_u8(values: np.ndarray) -> np.ndarray:
        return np.clip(values, 0, 255).astype(np.uint8)

    @staticmethod
    def color_distance(pixels: np.ndarray, color) -> np.ndarray:
        """
        Euclidean RGB distance, element-wise.
        `color` is an (r, g, b) triple or an array broadcastable to `pixels`.
        """
        diff = pixels.astype(np.float64) - np.asarray(color, dtype=np.float64)
        return np.sqrt((diff ** 2).sum(axis=-1))

    # ---------- channel filters ----------
    @staticmethod
    def zero_blue(pixels: np.ndarray) -> np.ndarray:
        out = pixels.copy()
        out[:, :, 2] = 0
        return out

    @staticmethod
    def keep_only_blue(pixels: np.ndarray) -> np.ndarray:
        out = pixels.copy()
        out[:, :, :2] = 0
        return out

    @staticmethod
    def negate(pixels: np.ndarray) -> np.ndarray:
        return 255 - pixels

    @classmethod
    def solarize(cls, pixels: np.ndarray, threshold: int) -> np.ndarray:
        """Invert every channel value that sits below `threshold`."""
        values = cls._as_int(pixels)
        return cls._to_u8(np.where(values < threshold, 255 - values, values))

    @classmethod
    def grayscale(cls, pixels: np.ndarray) -> np.ndarray:
        avg = cls._as_int(pixels).sum(axis=-1) // 3
        return cls._to_u8(np.repeat(avg[:, :, None], 3, axis=2))

    @classmethod
    def tint(cls, pixels: np.ndarray, coefficients: Sequence[float]) -> np.ndarray:
        """
        Scale each channel by its coefficient (red, green, blue order).
        Products are truncated toward zero before clamping.
        """
        scaled = np.trunc(pixels.astype(np.float64) * np.asarray(coefficients, dtype=np.float64))
        return cls._to_u8(scaled)

    @classmethod
    def posterize(cls, pixels: np.ndarray, span: int) -> np.ndarray:
        if span <= 0:
            raise ValueError(f"Posterize span must be positive, got {span}")
        return cls._to_u8(cls._as_int(pixels) // span * span)

    # ---------- geometry ----------
    @staticmethod
    def mirror_vertical(pixels: np.ndarray) -> np.ndarray:
        """Copy the left half onto the right half, mirrored about the vertical midline."""
        out = pixels.copy()
        width = out.shape[1]
        half = width // 2
        if half:
            out[:, width - half:] = pixels[:, :half][:, ::-1]
        return out

    @staticmethod
    def mirror_right_to_left(pixels: np.ndarray) -> np.ndarray:
        out = pixels.copy()
        width = out.shape[1]
        half = width // 2
        if half:
            out[:, :half] = pixels[:, width - half:][:, ::-1]
        return out

    @staticmethod
    def mirror_horizontal(pixels: np.ndarray) -> np.ndarray:
        """Copy the top half onto the bottom half, mirrored about the horizontal midline."""
        out = pixels.copy()
        height = out.shape[0]
        half = height // 2
        if half:
            out[height - half:] = pixels[:half][::-1]
        return out

    @staticmethod
    def vertical_flip(pixels: np.ndarray) -> np.ndarray:
        return cv2.flip(pixels, 0)

    # ---------- neighbourhood filters ----------
    @classmethod
    def edge_detection(cls, pixels: np.ndarray, threshold: float) -> np.ndarray:
        """
        Paint edges black on a white canvas.

        The scan visits every source (r, c) with 1 <= r <= H-2 and c <= W-2 and
        paints its right, upper-right and lower-right neighbours by comparing
        them with the source. Later writes win, so every target in column
        c+1 ends up compared with source row min(row+1, H-2), column c.
        Column 0 and pictures shorter than 3 rows stay white.
        """
        height, width = pixels.shape[:2]
        out = np.full_like(pixels, 255)
        if height < 3 or width < 2:
            return out

        src_rows = np.minimum(np.arange(height) + 1, height - 2)
        sources = pixels[src_rows, :-1]
        dist = cls.color_distance(sources, pixels[:, 1:])
        out[:, 1:][dist >= threshold] = 0
        return out

    @staticmethod
    def chromakey(pixels: np.ndarray, background: np.ndarray, color, dist: float) -> np.ndarray:
        """Swap in `background` wherever the pixel is closer than `dist` to `color`."""
        mask = FilterRepository.color_distance(pixels, color) < dist
        out = pixels.copy()
        out[mask] = background[mask]
        return out

    @staticmethod
    def encode(pixels: np.ndarray, message: np.ndarray,
               dark_thr: int = STEGO_DARK_THRESHOLD) -> np.ndarray:
        """Hide a black/white message in the least significant bit of red."""
        out = pixels.copy()
        red = out[:, :, 0] & 0xFE
        red[message[:, :, 0] < dark_thr] |= 1
        out[:, :, 0] = red
        return out

    @staticmethod
    def decode(pixels: np.ndarray) -> np.ndarray:
        out = np.full_like(pixels, 255)
        out[(pixels[:, :, 0] & 1) == 1] = 0
        return out

    @staticmethod
    def _window_counts(size: int, radius: int) -> np.ndarray:
        idx = np.arange(size)
        return np.minimum(idx + radius, size - 1) - np.maximum(idx - radius, 0) + 1

    @classmethod
    def blur(cls, pixels: np.ndarray, radius: int) -> np.ndarray:
        """
        Box blur: mean of the in-bounds pixels of the (2r+1)x(2r+1) square.

        Sums come from an integral image of the zero-padded picture; the
        divisor only counts cells that fall inside the picture.
        """
        if radius < 0:
            raise ValueError(f"Blur radius must be >= 0, got {radius}")
        height, width = pixels.shape[:2]
        k = 2 * radius + 1

        padded = cv2.copyMakeBorder(pixels, radius, radius, radius, radius,
                                    cv2.BORDER_CONSTANT, value=(0, 0, 0))
        # float64 sums stay exact far past the int32 range of the default depth
        integral = cv2.integral(padded, sdepth=cv2.CV_64F)
        if integral.ndim == 2:
            integral = integral[:, :, None]

        sums = (integral[k:k + height, k:k + width]
                - integral[:height, k:k + width]
                - integral[k:k + height, :width]
                + integral[:height, :width])
        counts = np.outer(cls._window_counts(height, radius),
                          cls._window_counts(width, radius))
        return cls._to_u8(sums // counts[:, :, None])

    @staticmethod
    def _resample_offsets(rng: np.random.Generator, base: np.ndarray,
                          dist: int, limit: int) -> np.ndarray:
        out = base + rng.integers(-dist, dist + 1, size=base.shape)
        bad = (out < 0) | (out >= limit)
        while bad.any():
            out[bad] = base[bad] + rng.integers(-dist, dist + 1, size=int(bad.sum()))
            bad = (out < 0) | (out >= limit)
        return out

    @classmethod
    def glass_filter(cls, pixels: np.ndarray, dist: int,
                     rng: Optional[np.random.Generator] = None) -> np.ndarray:
        """
        Each output pixel copies a source pixel up to `dist` rows and `dist`
        columns away. Offsets landing outside the picture are redrawn.
        """
        if dist < 0:
            raise ValueError(f"Glass distance must be >= 0, got {dist}")
        rng = rng if rng is not None else np.random.default_rng()
        height, width = pixels.shape[:2]
        rows, cols = np.indices((height, width))
        src_rows = cls._resample_offsets(rng, rows, dist, height)
        src_cols = cls._resample_offsets(rng, cols, dist, width)
        return pixels[src_rows, src_cols]
