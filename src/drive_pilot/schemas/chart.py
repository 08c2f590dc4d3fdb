"""Metric chart layout schemas."""

from __future__ import annotations

from pydantic import BaseModel

RGB = tuple[float, float, float]


class ChartPoint(BaseModel, frozen=True):
    """One plotted metric value.

    ``value`` is the raw metric; ``x``/``y`` are chart coordinates.
    """

    series: str
    epoch: int
    x: float
    y: float
    value: float
    color: RGB


class AxisLabel(BaseModel, frozen=True):
    x: float
    y: float
    text: str


class ChartLayout(BaseModel, frozen=True):
    """Everything needed to draw one train/validation metric chart."""

    name: str
    points: list[ChartPoint]
    labels: list[AxisLabel]
    y_min: float
    y_max: float
