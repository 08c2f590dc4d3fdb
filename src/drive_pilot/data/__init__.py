"""Frame sources feeding the driving pipeline."""

from drive_pilot.data.frames import (
    IMAGE_EXTENSIONS,
    FrameSource,
    ImageDirectorySource,
    get_files,
)

__all__ = [
    "IMAGE_EXTENSIONS",
    "FrameSource",
    "ImageDirectorySource",
    "get_files",
]
