"""Shower energy calibration depending on the particle type hypothesis."""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from .calibration import UNKNOWN_ID, Correction, Shower, ShowerCalibrationGalore
from .config import ConfigurationError, check_parameters
from .graphs import (
    CalibrationFileError,
    CalibrationGraph,
    read_calibration_directory,
    verify_order,
)
from .interpolation import Interpolator, create_interpolator

SearchPath = str | Sequence[str] | None


@dataclass
class CalibrationInfo:
    """Calibration of one particle category as a function of energy [GeV]."""

    applies_to: list[int] = field(default_factory=list)
    min_e: float = -1.0
    max_e: float = -1.0
    factor: Interpolator | None = None
    error: Interpolator | None = None

    @classmethod
    def from_graph(
        cls, graph: CalibrationGraph, ids: int | Iterable[int] | None = None
    ) -> CalibrationInfo:
        """Build the calibration from a graph, registering the particle IDs."""
        verify_order(graph)
        if len(graph) == 0:
            raise CalibrationFileError(f"No point in graph '{graph.name}'")
        try:
            factor = create_interpolator(graph.x, graph.y)
            error = create_interpolator(graph.x, graph.ey)
        except ValueError as exc:
            raise CalibrationFileError(
                f"can't interpolate graph '{graph.name}': {exc}"
            ) from exc
        info = cls(min_e=graph.x[0], max_e=graph.x[-1], factor=factor, error=error)
        if ids is not None:
            info.apply_to(ids)
        return info

    def apply_to(self, *args: int | Iterable[int]) -> CalibrationInfo:
        """Register particle IDs this calibration applies to.

        A single ID is added only if not already present; a collection of IDs
        is added as a whole and the list is sorted again.
        """
        if len(args) == 1 and isinstance(args[0], int):
            pdgid = args[0]
            index = bisect_left(self.applies_to, pdgid)
            if index == len(self.applies_to) or self.applies_to[index] != pdgid:
                self.applies_to.insert(index, pdgid)
            return self
        for arg in args:
            if isinstance(arg, int):
                self.applies_to.append(arg)
            else:
                self.applies_to.extend(arg)
        self.applies_to.sort()
        return self

    def _bound(self, energy: float) -> float:
        return min(self.max_e, max(self.min_e, energy))

    def _require(self, interpolator: Interpolator | None) -> Interpolator:
        if interpolator is None:
            raise ValueError("calibration is not present")
        return interpolator

    def eval_factor(self, energy: float) -> float:
        """Return the correction factor, clamping energy to the covered range."""
        return self._require(self.factor)(self._bound(energy))

    def eval_error(self, energy: float) -> float:
        """Return the factor uncertainty, clamping energy to the covered range."""
        return self._require(self.error)(self._bound(energy))

    def present(self) -> bool:
        """Whether calibration information was loaded."""
        return self.max_e >= 0.0

    def uniform(self) -> bool:
        """Whether the calibration is the same at all energies."""
        return self.min_e == self.max_e

    def report(self) -> str:
        """Return a short description of this calibration."""
        if not self.present():
            return "not present"
        if self.uniform():
            text = (
                f"uniform correction {self.eval_factor(self.min_e):g} +/- "
                f"{self.eval_error(self.min_e):g} for all energies"
            )
        else:
            text = (
                f"correction valid from E={self.min_e:g} GeV "
                f"({self.eval_factor(self.min_e):g} +/- {self.eval_error(self.min_e):g})"
                f" to E={self.max_e:g} GeV "
                f"({self.eval_factor(self.max_e):g} +/- {self.eval_error(self.max_e):g})"
            )
        if self.applies_to:
            ids = "".join(f" {pdgid}" for pdgid in self.applies_to)
            text += f"; covers particles ID={{{ids} }}"
        return text


class ShowerCalibrationGaloreFromPID(ShowerCalibrationGalore):
    """Calibration chosen by particle type and interpolated in shower energy.

    The calibration location is ``path/to/file.json:Dir/Dir``; the directory
    must hold the graphs ``Pi0``, ``Photon``, ``Electron``, ``Muon`` and
    ``Default``.
    """

    def __init__(self, calibration_file: str, search_path: SearchPath = None) -> None:
        self.calibration_pi0 = CalibrationInfo()
        self.calibration_photon = CalibrationInfo()
        self.calibration_electron = CalibrationInfo()
        self.calibration_muon = CalibrationInfo()
        self.calibration_other = CalibrationInfo()
        self.read_calibration(calibration_file, search_path)

    @classmethod
    def from_parameters(
        cls, params: Mapping[str, Any] | None, search_path: SearchPath = None
    ) -> ShowerCalibrationGaloreFromPID:
        """Build the provider from a table with mandatory ``CalibrationFile``."""
        config = check_parameters(
            params, {"CalibrationFile"}, {"service_type", "service_provider"}
        )
        if "CalibrationFile" not in config:
            raise ConfigurationError("missing mandatory parameters: CalibrationFile")
        path = config["CalibrationFile"]
        if not isinstance(path, str):
            raise ConfigurationError(
                f"parameter 'CalibrationFile' must be a string, got {path!r}"
            )
        return cls(path, search_path)

    def read_calibration(self, path: str, search_path: SearchPath = None) -> None:
        """Read all the calibration graphs from the specified location."""
        try:
            directory = read_calibration_directory(path, search_path)
        except CalibrationFileError as exc:
            raise CalibrationFileError(
                f"Reading calibration from: '{path}': {exc}"
            ) from exc

        def read(name: str, ids: int | Iterable[int]) -> CalibrationInfo:
            graph = directory.graph(name)
            if len(graph) == 0:
                raise CalibrationFileError(
                    f"No point in graph {directory.path}/{name}"
                )
            return CalibrationInfo.from_graph(graph, ids)

        self.calibration_pi0 = read("Pi0", 111)
        self.calibration_photon = read("Photon", 22)
        self.calibration_electron = read("Electron", (-11, 11))
        self.calibration_muon = read("Muon", (-13, 13))
        self.calibration_other = read("Default", UNKNOWN_ID)

    def select_correction(self, pdgid: int) -> CalibrationInfo:
        """Return the calibration used for the given particle ID."""
        match pdgid:
            case 111:
                return self.calibration_pi0
            case 22:
                return self.calibration_photon
            case -11 | 11:
                return self.calibration_electron
            case -13 | 13:
                return self.calibration_muon
            case _:
                return self.calibration_other

    def correction_factor(self, shower: Shower, pdgid: int = UNKNOWN_ID) -> float:
        """Return the correction factor for the shower energy on its best plane."""
        info = self.select_correction(pdgid)
        return float(info.eval_factor(shower.best_energy()))

    def correction(self, shower: Shower, pdgid: int = UNKNOWN_ID) -> Correction:
        """Return the correction with uncertainty for the shower."""
        info = self.select_correction(pdgid)
        energy = shower.best_energy()
        return Correction(float(info.eval_factor(energy)), float(info.eval_error(energy)))

    def report(self) -> str:
        """Return a short report of all the corrections."""
        lines = [
            ("neutral pion:      ", self.calibration_pi0),
            ("photon:            ", self.calibration_photon),
            ("electron/positron: ", self.calibration_electron),
            ("muon/antimuon:     ", self.calibration_muon),
            ("other (default):   ", self.calibration_other),
        ]
        body = "".join(f"\n  - {label}{info.report()}" for label, info in lines)
        return f"Corrections for:{body}\n"