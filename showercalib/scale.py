"""Shower calibration provider applying a uniform energy scale."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .calibration import UNKNOWN_ID, Correction, Shower, ShowerCalibrationGalore
from .config import ConfigurationError, check_parameters


def _as_real(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"parameter '{name}' must be a real number, got {value!r}")
    return float(value)


class ShowerCalibrationGaloreScale(ShowerCalibrationGalore):
    """Applies the same correction to every shower and particle type."""

    def __init__(self, factor: float, error: float) -> None:
        self._correction = Correction(
            _as_real("factor", factor), _as_real("error", error)
        )

    @classmethod
    def from_parameters(
        cls, params: Mapping[str, Any] | None
    ) -> ShowerCalibrationGaloreScale:
        """Build the provider from a table with mandatory ``factor`` and ``error``."""
        config = check_parameters(
            params, {"factor", "error"}, {"service_type", "service_provider"}
        )
        missing = sorted({"factor", "error"} - config.keys())
        if missing:
            raise ConfigurationError(
                f"missing mandatory parameters: {', '.join(missing)}"
            )
        return cls(config["factor"], config["error"])

    def correction_factor(self, shower: Shower, pdgid: int = UNKNOWN_ID) -> float:
        """Return the uniform correction factor."""
        return self._correction.factor

    def correction(self, shower: Shower, pdgid: int = UNKNOWN_ID) -> Correction:
        """Return the uniform correction with its uncertainty."""
        return self._correction

    def report(self) -> str:
        """Describe the uniform correction in one line."""
        return f"Uniform correction: {self._correction}"