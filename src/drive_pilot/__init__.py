"""Camera-frame steering classifier and vehicle control loop."""

__version__ = "0.0.1"
