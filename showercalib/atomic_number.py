"""Provider of the atomic number of the active material in the TPC."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .config import ConfigurationError, check_parameters

DEFAULT_ATOMIC_NUMBER = 18


class AtomicNumber:
    """Provides the atomic number of the active material (argon by default)."""

    __slots__ = ("_z",)

    def __init__(self, z: int = DEFAULT_ATOMIC_NUMBER) -> None:
        if isinstance(z, bool) or not isinstance(z, int) or z < 0:
            raise ConfigurationError(
                f"AtomicNumber must be a non-negative integer, got {z!r}"
            )
        self._z = z

    @classmethod
    def from_parameters(cls, params: Mapping[str, Any] | None) -> AtomicNumber:
        """Build the provider from a configuration table.

        The only parameter is ``AtomicNumber`` (default 18); ``service_type``
        is tolerated and ignored.
        """
        config = check_parameters(params, {"AtomicNumber"}, {"service_type"})
        return cls(config.get("AtomicNumber", DEFAULT_ATOMIC_NUMBER))

    @property
    def z(self) -> int:
        """The atomic number."""
        return self._z

    def __repr__(self) -> str:
        return f"{type(self).__name__}(z={self._z})"