from __future__ import annotations

from io import BytesIO

import numpy as np
from PIL import Image, UnidentifiedImageError

AVATAR_SIZE = 256


class AvatarService:
    """Pure NumPy avatar shaping. Arrays are float32 RGB in [0, 1], shape (H, W, 3)."""

    @staticmethod
    def decode(data: bytes) -> np.ndarray:
        try:
            img = Image.open(BytesIO(data)).convert("RGB")
        except (UnidentifiedImageError, OSError) as exc:
            raise ValueError(f"Invalid image file: {exc}") from exc
        return np.asarray(img).astype(np.float32) / 255.0

    # Largest centered square
    @staticmethod
    def center_square(matrix: np.ndarray) -> np.ndarray:
        h, w = matrix.shape[:2]
        side = min(h, w)
        top = (h - side) // 2
        left = (w - side) // 2
        return matrix.astype(np.float32)[top : top + side, left : left + side]

    # Nearest-neighbour resize by index sampling
    @staticmethod
    def resize(matrix: np.ndarray, size: int) -> np.ndarray:
        if size <= 0:
            raise ValueError("size must be > 0")
        h, w = matrix.shape[:2]
        rows = (np.arange(size) * h // size).clip(0, h - 1)
        cols = (np.arange(size) * w // size).clip(0, w - 1)
        return matrix.astype(np.float32)[rows[:, None], cols[None, :]]

    @classmethod
    def make_avatar(cls, data: bytes, size: int = AVATAR_SIZE) -> np.ndarray:
        return cls.resize(cls.center_square(cls.decode(data)), size)
