"""Render chart layouts and images to PNG files."""

from __future__ import annotations

from pathlib import Path

import matplotlib
import matplotlib.pyplot as plt
from loguru import logger
from PIL import Image

from drive_pilot.schemas.chart import ChartLayout

_MARKERS = {"train": "o", "val": "s"}
_LEGEND = {"train": "Train", "val": "Validation"}


def render_chart(layout: ChartLayout, path: Path) -> Path:
    """Draw a metric layout in chart coordinates and save it as a PNG.

    Training points are drawn as circles and validation points as squares,
    each colored per point; axis labels are placed as text annotations.
    """
    matplotlib.use("Agg")
    path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(10, 6))
    for series in ("train", "val"):
        pts = [p for p in layout.points if p.series == series]
        if not pts:
            continue
        ax.plot([p.x for p in pts], [p.y for p in pts], color="0.7", linewidth=1)
        ax.scatter(
            [p.x for p in pts],
            [p.y for p in pts],
            c=[p.color for p in pts],
            marker=_MARKERS[series],
            edgecolors="black",
            label=_LEGEND[series],
            zorder=3,
        )

    for label in layout.labels:
        ax.text(label.x, label.y, label.text, ha="center", va="center", fontsize=9)

    xs = [p.x for p in layout.points] + [lbl.x for lbl in layout.labels]
    ys = [p.y for p in layout.points] + [lbl.y for lbl in layout.labels]
    ax.set_xlim(min(xs) - 1.0, max(xs) + 1.0)
    ax.set_ylim(min(ys) - 1.0, max(ys) + 1.0)
    ax.set_title(f"Training and Validation {layout.name}")
    ax.axis("off")
    ax.legend(loc="upper right")
    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)

    logger.info(f"{layout.name} chart saved to {path}")
    return path


def save_image(image: Image.Image, path: Path) -> Path:
    """Save a decoded image (e.g. the confusion matrix) as PNG."""
    path.parent.mkdir(parents=True, exist_ok=True)
    image.save(path, format="PNG")
    logger.info(f"Image saved to {path}")
    return path
