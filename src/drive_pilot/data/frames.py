"""Frame source protocol and an image-directory replay source."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from loguru import logger
from PIL import Image

from drive_pilot.errors import CaptureFailure
from drive_pilot.types import Frame

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".bmp")


class FrameSource(Protocol):
    """Anything that can hand over the current camera frame."""

    def capture(self) -> Frame: ...


def get_files(root: Path, extensions: tuple[str, ...] = IMAGE_EXTENSIONS) -> list[Path]:
    """Sorted files under ``root`` (recursive) whose lowercase suffix matches."""
    return sorted(
        p for p in root.rglob("*") if p.is_file() and p.suffix.lower() in extensions
    )


class ImageDirectorySource:
    """Replay image files from a directory as camera frames.

    Files are discovered recursively and served in sorted order.  The
    source raises :class:`CaptureFailure` when it runs out of frames unless
    ``loop`` is set.

    Args:
        directory: Root directory holding the frames.
        loop: Restart from the first frame after the last one.
    """

    def __init__(self, directory: str | Path, loop: bool = False) -> None:
        self.directory = Path(directory)
        self.loop = loop
        if not self.directory.is_dir():
            raise CaptureFailure(f"Frame directory not found: {self.directory}")

        self.files = get_files(self.directory)
        if not self.files:
            raise CaptureFailure(f"No image frames under {self.directory}")

        self.position = 0
        self.current: Path | None = None
        logger.info(f"Replaying {len(self.files)} frame(s) from {self.directory}")

    def __len__(self) -> int:
        return len(self.files)

    def capture(self) -> Frame:
        if self.position >= len(self.files):
            if not self.loop:
                raise CaptureFailure(f"No frames left in {self.directory}")
            self.position = 0

        path = self.files[self.position]
        self.position += 1
        self.current = path
        try:
            with Image.open(path) as img:
                return img.convert("RGB")
        except OSError as e:
            raise CaptureFailure(f"Could not read frame {path}: {e}") from e
