"""Pydantic configuration models for drive_pilot.

Static settings (preprocessing, scheduling, HTTP, chart layout) are frozen.
``DrivingConfig`` holds the live driving parameters and is mutated only
through its setter methods; every assignment is validated.
"""

from pydantic import BaseModel, ConfigDict, Field


class PreprocessConfig(BaseModel, frozen=True):
    """Configuration for :class:`FramePreprocessor`.

    ``image_size`` must match the square input size the model was trained on.
    ``flip_vertical`` corrects captures whose row order is bottom-up.
    """

    image_size: int = Field(default=56, ge=1)
    flip_vertical: bool = True


class DrivingConfig(BaseModel):
    """Live driving parameters shared by the actuator and the scheduler.

    ``frames_per_classification`` is the number of rendered frames between
    two classifications: a lower value means more frequent classification.
    """

    model_config = ConfigDict(validate_assignment=True)

    motor_torque: float = Field(default=90.0, ge=0.0, le=1000.0)
    max_steer_angle: float = Field(default=40.0, ge=0.0, le=90.0)
    frames_per_classification: int = Field(default=10, ge=1, le=120)
    brake_torque: float = Field(default=500.0, ge=0.0)
    autonomous: bool = False

    def set_motor_torque(self, value: float) -> None:
        self.motor_torque = value

    def set_max_steer_angle(self, value: float) -> None:
        self.max_steer_angle = value

    def set_frames_per_classification(self, value: int) -> None:
        self.frames_per_classification = value

    def set_autonomous(self, value: bool) -> None:
        self.autonomous = value

    def toggle_autonomous(self) -> bool:
        """Flip the autonomous flag and return the new value."""
        self.autonomous = not self.autonomous
        return self.autonomous


class SchedulerConfig(BaseModel, frozen=True):
    """Configuration for :class:`AdaptiveScheduler`.

    ``measure_interval`` is the real-time window (seconds, unaffected by the
    time scale) over which the measured classification rate is averaged.
    """

    max_frames_per_classification: int = Field(default=120, ge=1)
    measure_interval: float = Field(default=2.0, gt=0.0)


class TrainingClientConfig(BaseModel, frozen=True):
    """Endpoint and timeout for the remote training trigger."""

    api_url: str = "http://127.0.0.1:8000/api/train"
    timeout: float = Field(default=600.0, gt=0.0)


class ChartConfig(BaseModel, frozen=True):
    """Layout constants for metric charts."""

    x_spacing: float = Field(default=2.0, gt=0.0)
    y_scale: float = Field(default=10.0, gt=0.0)
    num_y_labels: int = Field(default=5, ge=1)
    label_offset: float = -2.0
    title_offset: float = 2.0
    axis_title_offset: float = -3.5
