"""stridekit: live workout telemetry and workout history."""

__version__ = "0.1.0"
