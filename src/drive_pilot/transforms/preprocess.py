"""Camera frame to model input conversion.

Flip, bilinear resize, ITU-R 601 luminance and [-1, 1] normalisation.  The
resize must stay bilinear so that tensors match the ones produced during
training.
"""

from __future__ import annotations

import numpy as np
from PIL import Image

from drive_pilot.config import PreprocessConfig
from drive_pilot.types import Frame, InputTensor

LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float32)


def to_pil_image(frame: Frame) -> Image.Image:
    """Convert a captured frame to an RGB PIL image.

    Accepts PIL images in any mode and uint8 arrays shaped ``(H, W)``,
    ``(H, W, 3)`` or ``(H, W, 4)``.
    """
    if isinstance(frame, Image.Image):
        return frame.convert("RGB")

    if not isinstance(frame, np.ndarray):
        raise TypeError(f"Expected a PIL Image or numpy array, got {type(frame)}")
    if frame.dtype != np.uint8:
        raise ValueError(f"Frame arrays must be uint8, got {frame.dtype}")
    if frame.size == 0:
        raise ValueError("Frame is empty")

    if frame.ndim == 2:
        return Image.fromarray(frame).convert("RGB")
    if frame.ndim == 3 and frame.shape[2] == 3:
        return Image.fromarray(frame)
    if frame.ndim == 3 and frame.shape[2] == 4:
        return Image.fromarray(frame).convert("RGB")
    raise ValueError(f"Unsupported frame shape {frame.shape}")


class FramePreprocessor:
    """Turn a captured frame into a ``(1, S, S, 1)`` float32 tensor.

    Args:
        config: Target size and flip setting.
    """

    def __init__(self, config: PreprocessConfig | None = None) -> None:
        self.config = config or PreprocessConfig()

    @property
    def image_size(self) -> int:
        return self.config.image_size

    def __call__(self, frame: Frame) -> InputTensor:
        img = to_pil_image(frame)

        if self.config.flip_vertical:
            img = img.transpose(Image.Transpose.FLIP_TOP_BOTTOM)

        size = self.config.image_size
        if img.size != (size, size):
            img = img.resize((size, size), Image.BILINEAR)

        rgb = np.asarray(img, dtype=np.float32) / 255.0
        gray = rgb @ LUMA_WEIGHTS
        normalized = np.clip((gray - 0.5) / 0.5, -1.0, 1.0)

        return normalized.astype(np.float32).reshape(1, size, size, 1)
