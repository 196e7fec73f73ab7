"""Config – 12-factor settings for backoff sequences.

Settings are plain dataclasses populated by a :class:`SettingsLoader`.
:class:`BackoffSettings` reads ``BACKOFF_*`` variables::

    BACKOFF_STRATEGY=exponential
    BACKOFF_SCALE=0.25
    BACKOFF_MAX_DELAY=30
    BACKOFF_MAX_ITERATIONS=6

and builds fresh sequences from them with :meth:`BackoffSettings.build`.
"""
from __future__ import annotations

import abc
import dataclasses
import os
from typing import Any, ClassVar, TypeVar

from backoff_sequence.errors import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)
from backoff_sequence.growth import (
    ConstantGrowth,
    ExponentialGrowth,
    GrowthFunction,
    LinearGrowth,
)
from backoff_sequence.sequence import BackoffSequence

T = TypeVar("T", bound="Settings")


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


class SettingsLoader(abc.ABC):
    """Port: load settings from an external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Load settings from OS environment variables."""

    def load(self, settings_class: type[T]) -> T:
        prefix = getattr(settings_class, "_prefix", "").upper()
        kwargs: dict[str, Any] = {}

        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            env_key = f"{prefix}_{field.name}".upper().lstrip("_")
            raw = os.environ.get(env_key)

            if raw is None:
                if (
                    field.default is dataclasses.MISSING
                    and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
                ):
                    raise MissingRequiredSettingError(env_key)
                continue

            try:
                kwargs[field.name] = self._coerce(raw, field.type)
            except ValueError as exc:
                raise InvalidSettingValueError(env_key, raw, str(exc)) from exc

        try:
            return settings_class(**kwargs)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to load settings: {exc}", cause=exc) from exc

    def _coerce(self, value: str, type_hint: Any) -> Any:  # noqa: PLR0911
        if isinstance(type_hint, str):
            hint = type_hint
        else:
            hint = getattr(type_hint, "__name__", None) or str(type_hint)
        parts = [p.strip() for p in hint.split("|")]
        optional = "None" in parts
        hint = next((p for p in parts if p != "None"), "")
        if optional and value.strip() in ("", "none", "None"):
            return None
        if hint == "bool":
            return value.lower() in ("1", "true", "yes", "on")
        if hint == "int":
            return int(value)
        if hint == "float":
            return float(value)
        if hint.startswith("list"):
            return [v.strip() for v in value.split(",") if v.strip()]
        return value


class DotenvSettingsLoader(SettingsLoader):
    """Load settings from a ``.env`` file then fall back to ``EnvSettingsLoader``."""

    def __init__(self, env_file: str = ".env", override: bool = False) -> None:
        self._env_file = env_file
        self._override = override

    def load(self, settings_class: type[T]) -> T:
        try:
            from dotenv import load_dotenv  # type: ignore[import-untyped]
        except ImportError as exc:
            raise ImportError("Install 'python-dotenv' to use DotenvSettingsLoader") from exc
        load_dotenv(self._env_file, override=self._override)
        return EnvSettingsLoader().load(settings_class)


_STRATEGIES: frozenset[str] = frozenset({"constant", "exponential", "linear"})


@dataclasses.dataclass
class BackoffSettings(Settings):
    """Declarative description of a backoff sequence (delays in seconds).

    ``base``/``scale``/``offset`` feed the growth function selected by
    ``strategy``: ``exponential`` uses all three, ``linear`` uses ``scale`` as
    the per-attempt step plus ``offset``, ``constant`` uses ``scale`` as the
    fixed delay.
    """

    _prefix: ClassVar[str] = "BACKOFF"

    strategy: str = "exponential"
    base: float = 2.0
    scale: float = 1.0
    offset: float = 0.0
    min_delay: float | None = None
    max_delay: float | None = None
    max_iterations: int | None = None

    def _validate(self) -> None:
        if self.strategy not in _STRATEGIES:
            raise InvalidSettingValueError(
                "strategy", self.strategy, f"expected one of {sorted(_STRATEGIES)}"
            )
        if self.max_iterations is not None and self.max_iterations < 0:
            raise InvalidSettingValueError("max_iterations", self.max_iterations, "must be >= 0")
        if (
            self.min_delay is not None
            and self.max_delay is not None
            and self.min_delay > self.max_delay
        ):
            raise InvalidSettingValueError(
                "min_delay", self.min_delay, f"greater than max_delay {self.max_delay!r}"
            )

    def growth(self) -> GrowthFunction:
        if self.strategy == "constant":
            return ConstantGrowth(self.scale)
        if self.strategy == "linear":
            return LinearGrowth(factor=self.scale, offset=self.offset)
        return ExponentialGrowth(base=self.base, scale=self.scale, offset=self.offset)

    def build(self) -> BackoffSequence[float]:
        """Return a new, unstarted sequence configured from these settings."""
        return (
            BackoffSequence(self.growth())
            .set_min(self.min_delay)
            .set_max(self.max_delay)
            .set_max_iterations(self.max_iterations)
        )


__all__ = [
    "BackoffSettings",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "Settings",
    "SettingsLoader",
]
