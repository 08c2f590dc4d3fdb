"""Per-frame decision record schema."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field

from drive_pilot.schemas.control import ControlOutput
from drive_pilot.types import DrivingCommand


class DecisionRecord(BaseModel):
    """Decision and control output for one classified frame."""

    frame: str
    command: DrivingCommand
    confidence: float
    probabilities: list[float]
    control: ControlOutput
    created_at: str = Field(default_factory=lambda: datetime.now(tz=UTC).isoformat())
