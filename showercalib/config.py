"""Validation of provider configuration tables."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any


class ConfigurationError(ValueError):
    """Raised when a provider configuration is malformed."""


def check_parameters(
    params: Mapping[str, Any] | None,
    known: Iterable[str],
    ignored: Iterable[str] = (),
) -> dict[str, Any]:
    """Check a configuration table and return only its known parameters.

    Keys listed in ``ignored`` are accepted and dropped. Any key that is
    neither known nor ignored raises :class:`ConfigurationError`.
    """
    if params is None:
        params = {}
    if not isinstance(params, Mapping):
        raise ConfigurationError(
            f"configuration must be a table, got {type(params).__name__}"
        )
    known_keys = set(known)
    ignored_keys = set(ignored)
    unexpected = sorted(
        str(key) for key in params if key not in known_keys and key not in ignored_keys
    )
    if unexpected:
        allowed = ", ".join(sorted(known_keys)) or "(none)"
        raise ConfigurationError(
            f"unsupported parameters: {', '.join(unexpected)} (allowed: {allowed})"
        )
    return {key: value for key, value in params.items() if key in known_keys}