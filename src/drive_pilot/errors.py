"""Exception hierarchy for drive_pilot.

None of these should terminate the host process: the pipeline and the
training session catch them at their boundary and fall back to a safe
default (brake, ``Unknown`` command, or an error status string).
"""


class DrivePilotError(Exception):
    """Base class for all drive_pilot errors."""


class ModelUnavailable(DrivePilotError):
    """No classification model was loaded; classification is disabled."""


class CaptureFailure(DrivePilotError):
    """No frame could be captured from the frame source."""


class NetworkFailure(DrivePilotError):
    """The training request failed (connection, protocol or payload error)."""


class MalformedPrediction(DrivePilotError):
    """The probability vector is empty, non-finite or has the wrong length."""
