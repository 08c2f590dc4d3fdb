"""Frame preprocessing for the steering classifier."""

from drive_pilot.transforms.preprocess import FramePreprocessor, to_pil_image

__all__ = [
    "FramePreprocessor",
    "to_pil_image",
]
