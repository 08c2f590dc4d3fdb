"""Type aliases and enumerations for drive_pilot inter-module contracts."""

from __future__ import annotations

from enum import Enum

import numpy as np
from PIL import Image

# A captured camera frame: PIL image or (H, W, C) uint8 array.
Frame = Image.Image | np.ndarray

# Model input: float32 array of shape (1, image_size, image_size, 1), values in [-1, 1].
InputTensor = np.ndarray


class DrivingCommand(str, Enum):
    """Discrete driving decision predicted from a camera frame.

    Class indices 0, 1, 2 of the classifier map to FORWARD, LEFT, RIGHT.
    Anything else is UNKNOWN, which stops the vehicle.
    """

    FORWARD = "Forward"
    LEFT = "Left"
    RIGHT = "Right"
    UNKNOWN = "Unknown"

    @classmethod
    def from_index(cls, index: int) -> DrivingCommand:
        """Map a classifier output index to a command."""
        return _INDEX_TO_COMMAND.get(index, cls.UNKNOWN)

    @property
    def symbol(self) -> str:
        """Arrow shown in the decision display."""
        return _COMMAND_SYMBOLS[self]


_INDEX_TO_COMMAND: dict[int, DrivingCommand] = {
    0: DrivingCommand.FORWARD,
    1: DrivingCommand.LEFT,
    2: DrivingCommand.RIGHT,
}

_COMMAND_SYMBOLS: dict[DrivingCommand, str] = {
    DrivingCommand.FORWARD: "↑",
    DrivingCommand.LEFT: "←",
    DrivingCommand.RIGHT: "→",
    DrivingCommand.UNKNOWN: "-",
}

NUM_CLASSES = len(_INDEX_TO_COMMAND)
