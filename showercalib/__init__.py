"""Shower energy calibration providers, calibration files and a detector material provider."""

__version__ = "0.1.0"

__all__ = [
    "atomic_number",
    "calibration",
    "config",
    "from_pid",
    "graphs",
    "interpolation",
    "scale",
    "services",
]