"""Shared pytest fixtures for drive_pilot tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from drive_pilot.errors import CaptureFailure, ModelUnavailable
from drive_pilot.inference.base import BaseSteeringClassifier


class StubClassifier(BaseSteeringClassifier):
    """Classifier returning fixed logits, or raising a configured error."""

    def __init__(
        self,
        logits: list[float] | None = None,
        available: bool = True,
        error: Exception | None = None,
    ) -> None:
        self.num_classes = 3
        self.logits = np.array(logits if logits is not None else [2.0, 0.5, 0.1])
        self._available = available
        self.error = error
        self.calls: list[np.ndarray] = []

    @property
    def available(self) -> bool:
        return self._available

    def classify(self, tensor: np.ndarray) -> np.ndarray:
        if not self._available:
            raise ModelUnavailable("stub has no model")
        self.calls.append(tensor)
        if self.error is not None:
            raise self.error
        return self.logits


class StubSource:
    """Frame source returning the same solid-color frame every time."""

    def __init__(self, color: tuple[int, int, int] = (120, 130, 140)) -> None:
        self.frame = np.full((32, 48, 3), color, dtype=np.uint8)
        self.captures = 0

    def capture(self) -> np.ndarray:
        self.captures += 1
        return self.frame


class FailingSource(StubSource):
    """Frame source whose camera never delivers."""

    def capture(self) -> np.ndarray:
        raise CaptureFailure("no camera")


@pytest.fixture()
def stub_classifier() -> StubClassifier:
    return StubClassifier()


@pytest.fixture()
def stub_source() -> StubSource:
    return StubSource()


@pytest.fixture()
def failing_source() -> FailingSource:
    return FailingSource()


@pytest.fixture()
def make_classifier() -> Callable[..., StubClassifier]:
    """Factory for stub classifiers with custom logits, availability or error."""
    return StubClassifier


@pytest.fixture()
def frames_dir(tmp_path: Path) -> Path:
    """Directory with 4 small RGB frames and one non-image file."""
    root = tmp_path / "frames"
    root.mkdir()
    for i in range(4):
        img = Image.new("RGB", (64, 48), color=(i * 60, 100, 150))
        img.save(root / f"frame_{i:03d}.png")
    (root / "notes.txt").write_text("not a frame")
    return root
