"""Classification decision schema."""

from __future__ import annotations

from pydantic import BaseModel

from drive_pilot.types import DrivingCommand


class Decision(BaseModel, frozen=True):
    """Command chosen from one probability vector.

    ``index`` is -1 when the vector was malformed and the command fell back
    to ``UNKNOWN``.
    """

    command: DrivingCommand
    index: int
    confidence: float
    probabilities: tuple[float, ...] = ()
