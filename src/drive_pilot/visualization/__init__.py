"""Training metric chart layout and rendering."""

from drive_pilot.visualization.metrics import lerp_color, map_metrics
from drive_pilot.visualization.plotting import render_chart, save_image

__all__ = [
    "lerp_color",
    "map_metrics",
    "render_chart",
    "save_image",
]
