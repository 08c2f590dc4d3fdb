"""Decision record output."""

from drive_pilot.io.decision_log import DecisionLogWriter

__all__ = ["DecisionLogWriter"]
