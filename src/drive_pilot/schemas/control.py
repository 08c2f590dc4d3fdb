"""Actuator output and manual input schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ControlOutput(BaseModel, frozen=True):
    """Continuous actuator signal for one driving command.

    ``steer_angle`` is in degrees, negative to the left.
    """

    motor_torque: float = Field(ge=0.0)
    steer_angle: float
    brake_torque: float = Field(default=0.0, ge=0.0)


class ManualInput(BaseModel, frozen=True):
    """Directional keys held during a manual-mode tick."""

    forward: bool = False
    left: bool = False
    right: bool = False
