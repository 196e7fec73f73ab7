"""Error hierarchy for backoff-sequence.

Hierarchy::

    BaseError
    └── ConfigError
        ├── MissingRequiredSettingError
        ├── InvalidSettingValueError
        └── InvalidBackoffConfigError

Exhaustion of a sequence is not an error and has no class here.
"""

from __future__ import annotations

import json
from typing import Any


class BaseError(Exception):
    """Root of the error hierarchy.

    ``detail`` carries the offending values so handlers and log processors
    can report them without parsing the message.
    """

    code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.detail: dict[str, Any] = detail or {}
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict (safe for logging)."""
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.detail:
            payload["detail"] = self.detail
        if self.__cause__ is not None:
            payload["cause"] = repr(self.__cause__)
        return payload


class ConfigError(BaseError):
    """Raised when configuration is invalid or loading failed."""

    code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A required environment variable is absent."""

    code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(
            f"Required setting '{setting_name}' is missing",
            detail={"setting": setting_name},
        )
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting's value is present but semantically invalid."""

    code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Setting '{setting_name}' has invalid value {value!r}: {reason}",
            detail={"setting": setting_name, "value": value},
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


class InvalidBackoffConfigError(ConfigError):
    """A :class:`~backoff_sequence.sequence.BackoffSequence` was configured inconsistently."""

    code = "invalid_backoff_config"


__all__ = [
    "BaseError",
    "ConfigError",
    "InvalidBackoffConfigError",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
]
