"""Registry giving access to configured service providers by service name."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from .atomic_number import AtomicNumber
from .calibration import ShowerCalibrationGalore
from .from_pid import ShowerCalibrationGaloreFromPID
from .scale import ShowerCalibrationGaloreScale

SearchPath = str | Sequence[str] | None

ATOMIC_NUMBER_SERVICE = "AtomicNumberService"
SHOWER_CALIBRATION_SERVICE = "ShowerCalibrationGaloreService"
SCALE_SERVICE = "ShowerCalibrationGaloreScaleService"
FROM_PID_SERVICE = "ShowerCalibrationGaloreFromPIDService"

_ShowerCalibrationFactory = Callable[
    [Mapping[str, Any], SearchPath], ShowerCalibrationGalore
]

_SHOWER_CALIBRATION_IMPLEMENTATIONS: dict[str, _ShowerCalibrationFactory] = {
    SCALE_SERVICE: lambda params, search_path: ShowerCalibrationGaloreScale.from_parameters(
        params
    ),
    FROM_PID_SERVICE: ShowerCalibrationGaloreFromPID.from_parameters,
}


class ServiceError(LookupError):
    """Raised when a service is unknown, not configured or misconfigured."""


def make_shower_calibration(
    params: Mapping[str, Any] | None, search_path: SearchPath = None
) -> ShowerCalibrationGalore:
    """Create the shower calibration provider chosen by ``service_provider``.

    Supported implementations are ``ShowerCalibrationGaloreScaleService`` and
    ``ShowerCalibrationGaloreFromPIDService``.
    """
    if params is None:
        params = {}
    if not isinstance(params, Mapping):
        raise ServiceError(
            f"configuration of {SHOWER_CALIBRATION_SERVICE} must be a table, "
            f"got {type(params).__name__}"
        )
    implementation = params.get("service_provider")
    if implementation is None:
        raise ServiceError(
            f"{SHOWER_CALIBRATION_SERVICE} requires a 'service_provider' parameter"
        )
    factory = _SHOWER_CALIBRATION_IMPLEMENTATIONS.get(implementation)
    if factory is None:
        known = ", ".join(sorted(_SHOWER_CALIBRATION_IMPLEMENTATIONS))
        raise ServiceError(
            f"unknown implementation '{implementation}' of "
            f"{SHOWER_CALIBRATION_SERVICE} (known: {known})"
        )
    return factory(params, search_path)


class ServiceRegistry:
    """Builds service providers on first request from a configuration table.

    ``configuration`` maps service names to their parameter tables. Providers
    are created lazily and the same instance is returned on later requests.
    """

    def __init__(
        self,
        configuration: Mapping[str, Mapping[str, Any] | None] | None = None,
        search_path: SearchPath = None,
    ) -> None:
        if configuration is None:
            configuration = {}
        if not isinstance(configuration, Mapping):
            raise ServiceError(
                f"service configuration must be a table, "
                f"got {type(configuration).__name__}"
            )
        unknown = sorted(str(name) for name in configuration if name not in self._factories())
        if unknown:
            raise ServiceError(f"unknown services: {', '.join(unknown)}")
        self._configuration = {name: params for name, params in configuration.items()}
        self._search_path = search_path
        self._providers: dict[str, Any] = {}

    def _factories(self) -> dict[str, Callable[[Mapping[str, Any] | None], Any]]:
        return {
            ATOMIC_NUMBER_SERVICE: AtomicNumber.from_parameters,
            SHOWER_CALIBRATION_SERVICE: lambda params: make_shower_calibration(
                params, self._search_path
            ),
        }

    def __contains__(self, name: object) -> bool:
        return name in self._configuration

    def provider(self, name: str) -> Any:
        """Return the provider of the named service, creating it if needed."""
        cached = self._providers.get(name)
        if cached is not None:
            return cached
        factory = self._factories().get(name)
        if factory is None:
            raise ServiceError(f"unknown service '{name}'")
        if name not in self._configuration:
            raise ServiceError(f"service '{name}' is not configured")
        provider = factory(self._configuration[name])
        self._providers[name] = provider
        return provider