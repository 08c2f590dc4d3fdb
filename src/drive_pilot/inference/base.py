"""Abstract base class for steering classifiers."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from drive_pilot.types import InputTensor


def softmax(logits: np.ndarray) -> np.ndarray:  # type: ignore[type-arg]
    """Softmax over the last axis, shifted by the max logit for stability."""
    logits = np.asarray(logits, dtype=np.float64)
    exp = np.exp(logits - logits.max(axis=-1, keepdims=True))
    return exp / exp.sum(axis=-1, keepdims=True)


class BaseSteeringClassifier(ABC):
    """Base class for classifiers that score a preprocessed frame.

    Subclasses report whether a model is loaded via ``available`` and
    implement ``classify``, which must raise
    :class:`~drive_pilot.errors.ModelUnavailable` when it is not.
    """

    num_classes: int

    @property
    @abstractmethod
    def available(self) -> bool:
        """True when a model is loaded and ``classify`` can run."""

    @abstractmethod
    def classify(self, tensor: InputTensor) -> np.ndarray:  # type: ignore[type-arg]
        """Run inference on one input tensor.

        Returns the raw logits as a 1-D array of length ``num_classes``.
        """
