"""Shower representation and the shower calibration provider interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field

UNKNOWN_ID = 0
"""Particle ID meaning that no particle hypothesis is given."""


@dataclass
class Shower:
    """A reconstructed shower with per-plane energy measurements [GeV]."""

    energies: list[float]
    energy_errors: list[float] = field(default_factory=list)
    best_plane: int = 2
    shower_id: int = 1

    def best_energy(self) -> float:
        """Return the energy measured on the best plane."""
        if not 0 <= self.best_plane < len(self.energies):
            raise IndexError(
                f"best plane {self.best_plane} out of range "
                f"for {len(self.energies)} planes"
            )
        return self.energies[self.best_plane]

    def set_total_energy(self, energies: Sequence[float]) -> None:
        """Replace the per-plane energy measurements."""
        self.energies = list(energies)


def make_shower(energy: float, best_plane: int = 2, shower_id: int = 1) -> Shower:
    """Create a shower on a three-plane detector with the same energy on all planes."""
    return Shower(
        energies=[energy] * 3,
        energy_errors=[0.1 * energy] * 3,
        best_plane=best_plane,
        shower_id=shower_id,
    )


@dataclass(frozen=True)
class Correction:
    """A correction factor with its global uncertainty."""

    factor: float = 1.0
    error: float = 0.0

    def __str__(self) -> str:
        return f"{self.factor:g} +/- {self.error:g}"


class ShowerCalibrationGalore(ABC):
    """Interface of a provider computing calibration factors for showers."""

    UNKNOWN_ID = UNKNOWN_ID

    def correction_factor(self, shower: Shower, pdgid: int = UNKNOWN_ID) -> float:
        """Return the correction factor for the shower, without uncertainty."""
        return self.correction(shower, pdgid).factor

    @abstractmethod
    def correction(self, shower: Shower, pdgid: int = UNKNOWN_ID) -> Correction:
        """Return the correction for the shower, with its uncertainty."""

    @abstractmethod
    def report(self) -> str:
        """Describe the corrections in use as human-readable text."""