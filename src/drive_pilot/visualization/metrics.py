"""Map train/validation metric histories to chart coordinates.

Both series share one y range so they can be compared on the same chart.
Values are placed one epoch apart on x and normalised to ``[0, y_scale]``
on y.  Point colors fade from a base color toward a highlight color as the
value approaches the series maximum.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from drive_pilot.config import ChartConfig
from drive_pilot.schemas.chart import RGB, AxisLabel, ChartLayout, ChartPoint

GREEN: RGB = (0.0, 1.0, 0.0)
RED: RGB = (1.0, 0.0, 0.0)
BLUE: RGB = (0.0, 0.0, 1.0)
YELLOW: RGB = (1.0, 0.92, 0.016)


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def lerp_color(base: RGB, highlight: RGB, t: float) -> RGB:
    """Linear blend between two colors, ``t`` clamped to [0, 1]."""
    t = min(1.0, max(0.0, t))
    return (
        _lerp(base[0], highlight[0], t),
        _lerp(base[1], highlight[1], t),
        _lerp(base[2], highlight[2], t),
    )


def value_range(train: Sequence[float], val: Sequence[float]) -> tuple[float, float]:
    """Combined (min, max) of both series, widened by 1 when flat."""
    values = [*train, *val]
    if not values:
        raise ValueError("Cannot chart two empty metric series")
    y_min = min(values)
    y_max = max(values)
    if math.isclose(y_max, y_min, rel_tol=1e-6, abs_tol=1e-6):
        y_max += 1.0
    return y_min, y_max


def _series_points(
    series: str,
    values: Sequence[float],
    y_min: float,
    y_max: float,
    base: RGB,
    highlight: RGB,
    config: ChartConfig,
) -> list[ChartPoint]:
    points = []
    for epoch, value in enumerate(values, start=1):
        t = value / y_max if y_max != 0 else 0.0
        points.append(
            ChartPoint(
                series=series,
                epoch=epoch,
                x=epoch * config.x_spacing,
                y=(value - y_min) / (y_max - y_min) * config.y_scale,
                value=value,
                color=lerp_color(base, highlight, t),
            )
        )
    return points


def _axis_labels(
    name: str, epochs: int, y_min: float, y_max: float, config: ChartConfig
) -> list[AxisLabel]:
    labels = [
        AxisLabel(x=i * config.x_spacing, y=config.label_offset, text=str(i))
        for i in range(1, epochs + 1)
    ]
    labels.append(
        AxisLabel(
            x=(epochs - 1) * config.x_spacing / 2.0,
            y=config.axis_title_offset,
            text="Epoch",
        )
    )
    labels.append(
        AxisLabel(
            x=config.label_offset,
            y=config.y_scale + config.title_offset,
            text=name,
        )
    )
    n = config.num_y_labels
    for k in range(n + 1):
        fraction = k / n
        labels.append(
            AxisLabel(
                x=config.label_offset,
                y=fraction * config.y_scale,
                text=f"{_lerp(y_min, y_max, fraction):.2f}",
            )
        )
    return labels


def map_metrics(
    train: Sequence[float],
    val: Sequence[float],
    name: str,
    config: ChartConfig | None = None,
    train_color: RGB = GREEN,
    val_color: RGB = RED,
    train_highlight: RGB = RED,
    val_highlight: RGB = YELLOW,
) -> ChartLayout:
    """Lay out one metric (e.g. loss) for its train and validation series.

    The series may differ in length; the x axis covers the longer one.

    Args:
        train: Per-epoch training values.
        val: Per-epoch validation values.
        name: Metric name shown above the y axis.
        config: Spacing, scale and label placement.
        train_color: Base color for training points.
        val_color: Base color for validation points.
        train_highlight: Color training points fade to at the maximum.
        val_highlight: Color validation points fade to at the maximum.
    """
    config = config or ChartConfig()
    y_min, y_max = value_range(train, val)

    points = _series_points(
        "train", train, y_min, y_max, train_color, train_highlight, config
    )
    points += _series_points(
        "val", val, y_min, y_max, val_color, val_highlight, config
    )

    epochs = max(len(train), len(val))
    return ChartLayout(
        name=name,
        points=points,
        labels=_axis_labels(name, epochs, y_min, y_max, config),
        y_min=y_min,
        y_max=y_max,
    )
