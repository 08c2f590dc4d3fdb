"""Driving command to actuator output mapping.

Command table, with ``T`` = motor torque and ``S`` = max steer angle:

========  ============  ===========  ============
Command   motor torque  steer angle  brake torque
========  ============  ===========  ============
Forward   T             0            0
Left      3T            -S           0
Right     3T            +S           0
Unknown   0             0            brake_torque
========  ============  ===========  ============
"""

from __future__ import annotations

from typing import Protocol

from loguru import logger

from drive_pilot.config import DrivingConfig
from drive_pilot.schemas.control import ControlOutput, ManualInput
from drive_pilot.types import DrivingCommand

TURN_TORQUE_MULTIPLIER = 3.0


class ActuatorSink(Protocol):
    """Receiver of control outputs (the vehicle's wheels)."""

    def apply(self, output: ControlOutput) -> None: ...


class RecordingSink:
    """In-memory sink that keeps every applied output."""

    def __init__(self) -> None:
        self.history: list[ControlOutput] = []

    @property
    def last(self) -> ControlOutput | None:
        return self.history[-1] if self.history else None

    def apply(self, output: ControlOutput) -> None:
        self.history.append(output)


class CommandActuator:
    """Map commands to control outputs using the live driving config.

    Torque and steer angle are read on every call, so setter changes on
    ``config`` take effect immediately.
    """

    def __init__(self, config: DrivingConfig) -> None:
        self.config = config

    def actuate(self, command: DrivingCommand) -> ControlOutput:
        torque = self.config.motor_torque
        steer = self.config.max_steer_angle

        if command is DrivingCommand.FORWARD:
            return ControlOutput(motor_torque=torque, steer_angle=0.0)
        if command is DrivingCommand.LEFT:
            return ControlOutput(
                motor_torque=TURN_TORQUE_MULTIPLIER * torque, steer_angle=-steer
            )
        if command is DrivingCommand.RIGHT:
            return ControlOutput(
                motor_torque=TURN_TORQUE_MULTIPLIER * torque, steer_angle=steer
            )
        return self.stop()

    def stop(self) -> ControlOutput:
        """Zero torque and steering with a firm brake."""
        return ControlOutput(
            motor_torque=0.0,
            steer_angle=0.0,
            brake_torque=self.config.brake_torque,
        )


def command_from_keys(keys: ManualInput | None) -> DrivingCommand:
    """Map held directional keys to a command.

    Forward wins over Left, Left over Right; no key held means stop.
    """
    if keys is None:
        return DrivingCommand.UNKNOWN
    if keys.forward:
        return DrivingCommand.FORWARD
    if keys.left:
        return DrivingCommand.LEFT
    if keys.right:
        return DrivingCommand.RIGHT
    return DrivingCommand.UNKNOWN


def log_output(command: DrivingCommand, output: ControlOutput) -> None:
    logger.debug(
        f"{command.value} {command.symbol}: torque={output.motor_torque:.1f} "
        f"steer={output.steer_angle:.1f} brake={output.brake_torque:.1f}"
    )
