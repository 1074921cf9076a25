"""stride - workout telemetry and history from the terminal."""

__version__ = "0.1.0"
