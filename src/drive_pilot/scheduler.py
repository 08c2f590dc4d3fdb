"""Frame-count classification scheduling adapted to the simulation time scale.

Two rates are exposed and intentionally kept apart:

- ``effective_frequency``: frames between classifications, derived from the
  configured value and the time scale (frame based).
- ``measured_rate``: classifications per real second, averaged over a
  wall-clock window unaffected by the time scale.
"""

from __future__ import annotations

import math

from loguru import logger

from drive_pilot.config import DrivingConfig, SchedulerConfig

MIN_TIME_SCALE = 0.1
MAX_TIME_SCALE = 20.0


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def effective_frequency(base: int, time_scale: float, upper: int = 120) -> int:
    """Frames between classifications at the given time scale.

    A faster simulation covers more ground per frame, so the interval
    shrinks proportionally: ``clamp(round(base / time_scale), 1, upper)``.
    """
    if time_scale <= 0:
        raise ValueError(f"time_scale must be > 0, got {time_scale}")
    return max(1, min(upper, _round_half_up(base / time_scale)))


class TimeScale:
    """Process-wide simulation speed multiplier, clamped to [0.1, 20]."""

    def __init__(self, value: float = 1.0) -> None:
        self._value = 1.0
        self.set(value)

    @property
    def value(self) -> float:
        return self._value

    @property
    def label(self) -> str:
        return f"{self._value:.1f}x"

    def set(self, value: float) -> float:
        """Set the multiplier, clamped to the supported range."""
        self._value = min(MAX_TIME_SCALE, max(MIN_TIME_SCALE, float(value)))
        return self._value

    def reset(self) -> None:
        self._value = 1.0


class AdaptiveScheduler:
    """Decide on which ticks a classification runs.

    ``tick`` is called once per rendered frame.  It counts frames and fires
    when the counter reaches the effective frequency.  The caller reports
    each classification it runs through ``record_classification``; those
    counts and the real elapsed time publish ``measured_rate`` on the first
    tick after a full ``measure_interval``.

    Args:
        driving_config: Source of ``frames_per_classification``.
        config: Upper clamp and measurement window.
    """

    def __init__(
        self,
        driving_config: DrivingConfig,
        config: SchedulerConfig | None = None,
    ) -> None:
        self.driving_config = driving_config
        self.config = config or SchedulerConfig()
        self.frame_counter = 0
        self.effective_frequency = self.refresh_frequency()
        self.measured_rate: float | None = None
        self._window_elapsed = 0.0
        self._window_count = 0

    def refresh_frequency(self, time_scale: float = 1.0) -> int:
        """Recompute ``effective_frequency`` from the live config and scale."""
        self.effective_frequency = effective_frequency(
            self.driving_config.frames_per_classification,
            time_scale,
            upper=self.config.max_frames_per_classification,
        )
        return self.effective_frequency

    def tick(self, elapsed_real_seconds: float, time_scale: float = 1.0) -> bool:
        """Advance one frame.  Returns True when a classification is due."""
        if elapsed_real_seconds < 0:
            raise ValueError(
                f"elapsed_real_seconds must be >= 0, got {elapsed_real_seconds}"
            )
        if self._window_elapsed >= self.config.measure_interval:
            self.measured_rate = self._window_count / self._window_elapsed
            logger.debug(
                f"Classification rate {self.measured_rate:.2f}/sec "
                f"(every {self.effective_frequency} frames at {time_scale:.1f}x)"
            )
            self._window_elapsed = 0.0
            self._window_count = 0
        self._window_elapsed += elapsed_real_seconds

        self.refresh_frequency(time_scale)
        self.frame_counter += 1
        due = self.frame_counter >= self.effective_frequency
        if due:
            self.frame_counter = 0
        return due

    def record_classification(self) -> None:
        """Count one classification in the current measurement window."""
        self._window_count += 1

    def reset(self) -> None:
        self.frame_counter = 0
