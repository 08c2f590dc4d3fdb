"""Steering classification inference."""

from drive_pilot.inference.base import BaseSteeringClassifier, softmax
from drive_pilot.inference.onnx_classifier import ONNXSteeringClassifier

__all__ = [
    "BaseSteeringClassifier",
    "ONNXSteeringClassifier",
    "softmax",
]
