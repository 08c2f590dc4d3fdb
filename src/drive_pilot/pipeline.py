"""Perception-to-control loop.

One :class:`DrivingPipeline` owns a frame source, a classifier, an actuator
sink and the live driving config.  The host calls ``tick`` once per rendered
frame; the pipeline decides whether to classify (autonomous mode) or to
follow the held keys (manual mode), then applies one control output.
"""

from __future__ import annotations

import threading

from loguru import logger
from pydantic import BaseModel

from drive_pilot.config import DrivingConfig, PreprocessConfig, SchedulerConfig
from drive_pilot.control import (
    ActuatorSink,
    CommandActuator,
    command_from_keys,
    log_output,
)
from drive_pilot.data.frames import FrameSource
from drive_pilot.decision import UNKNOWN_DECISION, decide_from_logits
from drive_pilot.errors import CaptureFailure, ModelUnavailable
from drive_pilot.inference.base import BaseSteeringClassifier
from drive_pilot.scheduler import AdaptiveScheduler
from drive_pilot.schemas.control import ControlOutput, ManualInput
from drive_pilot.schemas.decision import Decision
from drive_pilot.transforms.preprocess import FramePreprocessor
from drive_pilot.types import DrivingCommand


class StepResult(BaseModel, frozen=True):
    """Outcome of one pipeline tick.

    ``decision`` is set only on ticks that ran a classification.
    """

    autonomous: bool
    command: DrivingCommand | None
    output: ControlOutput | None
    decision: Decision | None = None


class DrivingPipeline:
    """Capture, preprocess, classify, decide and actuate.

    Missing collaborators disable only what depends on them: no frame source
    is fatal at construction (:class:`CaptureFailure`), an unavailable
    classifier keeps manual driving working but refuses autonomous mode.
    Inference and capture errors during a run are logged and the vehicle
    brakes.

    All state is confined to this object; ``tick`` holds one lock so ticks
    from several threads never interleave.

    Args:
        frame_source: Camera frame provider.
        classifier: Steering classifier; may be unavailable.
        sink: Receiver of control outputs.
        driving_config: Live torque, steering, frequency and mode settings.
        preprocess_config: Model input size and flip setting.
        scheduler_config: Frequency clamp and rate measurement window.
    """

    def __init__(
        self,
        frame_source: FrameSource | None,
        classifier: BaseSteeringClassifier,
        sink: ActuatorSink,
        driving_config: DrivingConfig | None = None,
        preprocess_config: PreprocessConfig | None = None,
        scheduler_config: SchedulerConfig | None = None,
    ) -> None:
        if frame_source is None:
            raise CaptureFailure("No frame source available")

        self.frame_source = frame_source
        self.classifier = classifier
        self.sink = sink
        self.config = driving_config or DrivingConfig()
        self.preprocessor = FramePreprocessor(preprocess_config)
        self.actuator = CommandActuator(self.config)
        self.scheduler = AdaptiveScheduler(self.config, scheduler_config)
        self.last_decision: Decision | None = None
        self.last_output: ControlOutput | None = None
        self._lock = threading.Lock()

        if not self.classifier.available:
            logger.error(
                "Classifier unavailable: autonomous driving disabled, "
                "manual control only"
            )
            self.config.set_autonomous(False)

    @property
    def autonomous(self) -> bool:
        return self.config.autonomous

    def set_autonomous(self, enabled: bool) -> bool:
        """Switch modes; leaving autonomous mode stops the vehicle.

        Returns the resulting mode, which stays manual when no model is
        loaded.
        """
        if enabled and not self.classifier.available:
            logger.warning("Cannot enable autonomous mode: no model loaded")
            enabled = False

        with self._lock:
            self.config.set_autonomous(enabled)
            self.scheduler.reset()
            if not enabled:
                self._apply(DrivingCommand.UNKNOWN)
        logger.info(f"Autonomous mode {'STARTED' if enabled else 'STOPPED'}")
        return enabled

    def toggle_autonomous(self) -> bool:
        return self.set_autonomous(not self.config.autonomous)

    def tick(
        self,
        elapsed_real_seconds: float,
        time_scale: float = 1.0,
        keys: ManualInput | None = None,
    ) -> StepResult:
        """Advance the loop by one frame.

        Args:
            elapsed_real_seconds: Wall-clock time since the previous tick.
            time_scale: Current simulation speed multiplier.
            keys: Directional keys held this frame (manual mode only).
        """
        with self._lock:
            if not self.config.autonomous:
                command = command_from_keys(keys)
                output = self._apply(command)
                return StepResult(autonomous=False, command=command, output=output)

            if not self.scheduler.tick(elapsed_real_seconds, time_scale):
                return StepResult(autonomous=True, command=None, output=None)

            decision = self._classify()
            self.scheduler.record_classification()
            output = self._apply(decision.command)
            return StepResult(
                autonomous=True,
                command=decision.command,
                output=output,
                decision=decision,
            )

    def classify_and_drive(self) -> Decision:
        """Run one full capture-to-actuator cycle now."""
        with self._lock:
            decision = self._classify()
            self._apply(decision.command)
            return decision

    def classify_now(self) -> Decision:
        """On-demand classification, available in either mode."""
        logger.info("Manual classification requested")
        return self.classify_and_drive()

    def _classify(self) -> Decision:
        try:
            frame = self.frame_source.capture()
            tensor = self.preprocessor(frame)
            logits = self.classifier.classify(tensor)
        except ModelUnavailable as e:
            logger.error(f"Classification skipped: {e}")
            decision = UNKNOWN_DECISION
        except CaptureFailure as e:
            logger.error(f"Frame capture failed: {e}")
            decision = UNKNOWN_DECISION
        except Exception as e:
            logger.error(f"Inference failed: {e}")
            decision = UNKNOWN_DECISION
        else:
            decision = decide_from_logits(logits)
            logger.debug(
                f"Classification: {decision.command.value}, index={decision.index}, "
                f"confidence={decision.confidence * 100:.2f}%"
            )

        self.last_decision = decision
        return decision

    def _apply(self, command: DrivingCommand) -> ControlOutput:
        output = self.actuator.actuate(command)
        self.sink.apply(output)
        self.last_output = output
        log_output(command, output)
        return output
