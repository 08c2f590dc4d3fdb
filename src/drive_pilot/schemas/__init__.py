"""Pydantic data schemas shared across drive_pilot modules."""

from drive_pilot.schemas.chart import AxisLabel, ChartLayout, ChartPoint
from drive_pilot.schemas.control import ControlOutput, ManualInput
from drive_pilot.schemas.decision import Decision
from drive_pilot.schemas.record import DecisionRecord
from drive_pilot.schemas.training import TrainingResponse

__all__ = [
    "AxisLabel",
    "ChartLayout",
    "ChartPoint",
    "ControlOutput",
    "Decision",
    "DecisionRecord",
    "ManualInput",
    "TrainingResponse",
]
