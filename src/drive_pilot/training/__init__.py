"""Remote training trigger."""

from drive_pilot.training.client import (
    TrainingClient,
    TrainingSession,
    decode_confusion_matrix,
)

__all__ = [
    "TrainingClient",
    "TrainingSession",
    "decode_confusion_matrix",
]
