"""Probability vector to driving command mapping."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from loguru import logger

from drive_pilot.errors import MalformedPrediction
from drive_pilot.inference.base import softmax
from drive_pilot.schemas.decision import Decision
from drive_pilot.types import NUM_CLASSES, DrivingCommand

ProbabilityVector = Sequence[float] | np.ndarray

UNKNOWN_DECISION = Decision(command=DrivingCommand.UNKNOWN, index=-1, confidence=0.0)


def _as_vector(values: ProbabilityVector) -> np.ndarray:  # type: ignore[type-arg]
    try:
        return np.asarray(values, dtype=np.float64).reshape(-1)
    except (TypeError, ValueError) as e:
        raise MalformedPrediction(f"not a numeric vector: {e}") from e


def _validate(probabilities: ProbabilityVector) -> np.ndarray:  # type: ignore[type-arg]
    probs = _as_vector(probabilities)
    if probs.size == 0:
        raise MalformedPrediction("empty probability vector")
    if probs.size != NUM_CLASSES:
        raise MalformedPrediction(
            f"expected {NUM_CLASSES} probabilities, got {probs.size}"
        )
    if not np.all(np.isfinite(probs)):
        raise MalformedPrediction(f"non-finite probabilities: {probs.tolist()}")
    return probs


def decide(probabilities: ProbabilityVector) -> Decision:
    """Pick the most likely command.

    Ties go to the lowest index (``np.argmax`` returns the first maximum).
    A malformed vector yields ``UNKNOWN`` instead of raising.
    """
    try:
        probs = _validate(probabilities)
    except MalformedPrediction as e:
        logger.warning(f"Malformed prediction, falling back to Unknown: {e}")
        return UNKNOWN_DECISION

    index = int(np.argmax(probs))
    return Decision(
        command=DrivingCommand.from_index(index),
        index=index,
        confidence=float(probs[index]),
        probabilities=tuple(float(p) for p in probs),
    )


def decide_from_logits(logits: ProbabilityVector) -> Decision:
    """Softmax the raw logits, then :func:`decide`."""
    try:
        raw = _as_vector(logits)
    except MalformedPrediction as e:
        logger.warning(f"Malformed prediction, falling back to Unknown: {e}")
        return UNKNOWN_DECISION
    if raw.size == 0:
        return decide(raw)
    return decide(softmax(raw))
