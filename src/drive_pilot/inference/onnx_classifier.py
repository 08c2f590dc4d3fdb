"""ONNX Runtime steering classifier."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import onnxruntime as ort
from loguru import logger

from drive_pilot.errors import ModelUnavailable
from drive_pilot.inference.base import BaseSteeringClassifier
from drive_pilot.types import NUM_CLASSES, InputTensor


def _is_channels_first(shape: list[object]) -> bool:
    """True for NCHW inputs like ``(1, 1, 56, 56)``.

    Tensors are produced NHWC; a model exported from a channels-first
    framework needs them transposed.
    """
    if len(shape) != 4:
        return False
    return shape[1] == 1 and shape[3] != 1


class ONNXSteeringClassifier(BaseSteeringClassifier):
    """Run the steering classifier with ONNX Runtime.

    A model that fails to load does not raise: the classifier stays
    unavailable and ``classify`` raises :class:`ModelUnavailable`, so the
    owner can disable autonomous driving and keep manual control.

    Inputs and outputs go through an ``IOBinding`` that is cleared after
    every call, whether inference succeeds or raises.  Not re-entrant:
    call from a single owner.

    Args:
        model_path: Path to the ``.onnx`` file.
        num_classes: Expected number of output logits.
        providers: Execution providers; defaults to all available.
    """

    def __init__(
        self,
        model_path: str | Path,
        num_classes: int = NUM_CLASSES,
        providers: list[str] | None = None,
    ) -> None:
        self.model_path = Path(model_path)
        self.num_classes = num_classes
        self.session: ort.InferenceSession | None = None
        self.input_name = ""
        self.output_name = ""
        self.channels_first = False

        if not self.model_path.is_file():
            logger.error(f"ONNX model not found: {self.model_path}")
            return

        try:
            self.session = ort.InferenceSession(
                str(self.model_path),
                providers=providers or ort.get_available_providers(),
            )
        except Exception as e:
            logger.error(f"Failed to load ONNX model {self.model_path}: {e}")
            self.session = None
            return

        model_input = self.session.get_inputs()[0]
        self.input_name = model_input.name
        self.output_name = self.session.get_outputs()[0].name
        self.channels_first = _is_channels_first(list(model_input.shape))
        logger.info(
            f"Loaded ONNX model {self.model_path.name} "
            f"(input={self.input_name}, channels_first={self.channels_first}, "
            f"providers={self.session.get_providers()})"
        )

    @property
    def available(self) -> bool:
        return self.session is not None

    def classify(self, tensor: InputTensor) -> np.ndarray:  # type: ignore[type-arg]
        if self.session is None:
            raise ModelUnavailable(f"No model loaded from {self.model_path}")

        array = np.asarray(tensor, dtype=np.float32)
        if self.channels_first:
            array = array.transpose(0, 3, 1, 2)
        array = np.ascontiguousarray(array)

        binding = self.session.io_binding()
        try:
            binding.bind_cpu_input(self.input_name, array)
            binding.bind_output(self.output_name)
            self.session.run_with_iobinding(binding)
            outputs = binding.copy_outputs_to_cpu()
        finally:
            binding.clear_binding_inputs()
            binding.clear_binding_outputs()

        logits = np.asarray(outputs[0], dtype=np.float32).reshape(-1)
        if logits.shape[0] != self.num_classes:
            logger.warning(
                f"Model returned {logits.shape[0]} logits, expected {self.num_classes}"
            )
        return logits

    def close(self) -> None:
        """Release the inference session."""
        self.session = None
