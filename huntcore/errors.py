"""Exception hierarchy for the decision core."""

from __future__ import annotations


class HuntcoreError(Exception):
    """Base class for all huntcore errors."""


class ConfigError(HuntcoreError, ValueError):
    """Raised when an EngineConfig setting is invalid."""


class UnknownProfileError(ConfigError, KeyError):
    """Raised when a named score profile does not exist."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""
