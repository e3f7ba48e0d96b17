from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when a button config or motion spec violates its contract."""
