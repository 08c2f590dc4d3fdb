"""Tests for the metric chart mapper and renderer."""

from __future__ import annotations

from pathlib import Path

import pytest

from drive_pilot.config import ChartConfig
from drive_pilot.visualization import lerp_color, map_metrics, render_chart
from drive_pilot.visualization.metrics import GREEN, RED, YELLOW, value_range


class TestValueRange:
    def test_combined_min_max(self) -> None:
        assert value_range([1, 2, 3], [1, 1, 1]) == (1, 3)

    def test_flat_series_nudged(self) -> None:
        assert value_range([5, 5], [5, 5]) == (5, 6)

    def test_one_empty_series(self) -> None:
        assert value_range([], [0.2, 0.8]) == (0.2, 0.8)

    def test_both_empty_raises(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            value_range([], [])


class TestLerpColor:
    def test_endpoints(self) -> None:
        assert lerp_color(GREEN, RED, 0.0) == GREEN
        assert lerp_color(GREEN, RED, 1.0) == RED

    def test_midpoint(self) -> None:
        assert lerp_color(GREEN, RED, 0.5) == (0.5, 0.5, 0.0)

    def test_clamped(self) -> None:
        assert lerp_color(GREEN, RED, 2.0) == RED
        assert lerp_color(GREEN, RED, -1.0) == GREEN


class TestMapMetrics:
    def test_normalization(self) -> None:
        layout = map_metrics([1, 2, 3], [1, 1, 1], "Loss", ChartConfig(y_scale=10))
        assert layout.y_min == 1
        assert layout.y_max == 3
        train = [p for p in layout.points if p.series == "train"]
        assert [p.y for p in train] == pytest.approx([0.0, 5.0, 10.0])
        val = [p for p in layout.points if p.series == "val"]
        assert [p.y for p in val] == pytest.approx([0.0, 0.0, 0.0])

    def test_flat_series_no_division_by_zero(self) -> None:
        layout = map_metrics([5, 5], [5, 5], "Accuracy")
        assert (layout.y_min, layout.y_max) == (5, 6)
        assert all(p.y == 0.0 for p in layout.points)

    def test_x_positions_one_indexed(self) -> None:
        layout = map_metrics([0.5, 0.4, 0.3], [0.6], "Loss", ChartConfig(x_spacing=2.0))
        assert [p.x for p in layout.points if p.series == "train"] == [2.0, 4.0, 6.0]
        assert [p.x for p in layout.points if p.series == "val"] == [2.0]

    def test_colors_scale_with_value(self) -> None:
        layout = map_metrics([0.0, 2.0], [4.0], "Loss")
        train = [p for p in layout.points if p.series == "train"]
        val = [p for p in layout.points if p.series == "val"][0]
        assert train[0].color == GREEN
        assert train[1].color == pytest.approx((0.5, 0.5, 0.0))
        assert val.color == pytest.approx(YELLOW)

    def test_zero_max_uses_base_color(self) -> None:
        layout = map_metrics([-2.0, 0.0], [-1.0], "Loss")
        assert all(
            p.color == (GREEN if p.series == "train" else RED) for p in layout.points
        )

    def test_axis_labels(self) -> None:
        config = ChartConfig(x_spacing=2.0, y_scale=10.0, num_y_labels=5)
        layout = map_metrics([1.0, 2.0, 3.0], [2.0, 3.0], "Loss", config)
        texts = [lbl.text for lbl in layout.labels]

        # one label per epoch, the axis titles, then num_y_labels + 1 values
        assert texts[:3] == ["1", "2", "3"]
        assert "Epoch" in texts
        assert "Loss" in texts
        y_labels = layout.labels[-6:]
        assert [lbl.text for lbl in y_labels] == [
            "1.00",
            "1.40",
            "1.80",
            "2.20",
            "2.60",
            "3.00",
        ]
        assert [lbl.y for lbl in y_labels] == pytest.approx([0, 2, 4, 6, 8, 10])
        assert all(lbl.x == -2.0 for lbl in y_labels)

        epoch_title = next(lbl for lbl in layout.labels if lbl.text == "Epoch")
        assert (epoch_title.x, epoch_title.y) == (2.0, -3.5)
        name_title = next(lbl for lbl in layout.labels if lbl.text == "Loss")
        assert (name_title.x, name_title.y) == (-2.0, 12.0)

    def test_epoch_count_follows_longer_series(self) -> None:
        layout = map_metrics([1.0], [1.0, 2.0, 3.0, 4.0], "Loss")
        epoch_labels = [lbl for lbl in layout.labels if lbl.y == -2.0]
        assert [lbl.text for lbl in epoch_labels] == ["1", "2", "3", "4"]


class TestRenderChart:
    def test_writes_png(self, tmp_path: Path) -> None:
        layout = map_metrics([0.9, 0.5, 0.3], [1.0, 0.6, 0.4], "Loss")
        out = render_chart(layout, tmp_path / "charts" / "loss_history.png")
        assert out.exists()
        assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"
