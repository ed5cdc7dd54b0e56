"""Synthetic telemetry and anomaly scoring for green-hydrogen facilities."""

__version__ = "0.1.0"
