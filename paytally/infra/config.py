"""Runtime configuration for a paytally run.

Pure configuration data plus an environment loader. Command-line flags
override whatever load_config() reads from the environment.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import Enum
from typing import final

from paytally.core.errors import ConfigError
from paytally.core.money import DISPLAY_PLACES
from paytally.core.result import Err, Ok

ENV_ERROR_POLICY: str = "PAYTALLY_ERROR_POLICY"
ENV_LOG_LEVEL: str = "PAYTALLY_LOG_LEVEL"

LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ErrorPolicy(Enum):
    """What the pipeline does when the ledger rejects a record."""

    ABORT = "abort"  # stop the run at the first rejected record
    SKIP = "skip"  # log it, count it, carry on


@final
@dataclass(frozen=True, slots=True)
class EngineConfig:
    error_policy: ErrorPolicy = ErrorPolicy.ABORT
    log_level: str = "WARNING"
    display_places: int = DISPLAY_PLACES

    def __post_init__(self) -> None:
        if self.log_level not in LOG_LEVELS:
            raise TypeError(f"EngineConfig.log_level must be one of {LOG_LEVELS}, got {self.log_level!r}")
        if self.display_places < 0:
            raise TypeError(f"EngineConfig.display_places must be >= 0, got {self.display_places}")

    @property
    def logging_level(self) -> int:
        return logging.getLevelNamesMapping()[self.log_level]


def parse_error_policy(raw: str) -> Ok[ErrorPolicy] | Err[ConfigError]:
    try:
        return Ok(ErrorPolicy(raw.strip().lower()))
    except ValueError:
        return Err(ConfigError(
            message=f"Unknown error policy {raw!r}, expected one of "
                    f"{[p.value for p in ErrorPolicy]}",
            code="INVALID_CONFIG",
            source="infra.config.parse_error_policy",
            setting="error_policy",
        ))


def parse_log_level(raw: str) -> Ok[str] | Err[ConfigError]:
    level = raw.strip().upper()
    if level not in LOG_LEVELS:
        return Err(ConfigError(
            message=f"Unknown log level {raw!r}, expected one of {list(LOG_LEVELS)}",
            code="INVALID_CONFIG",
            source="infra.config.parse_log_level",
            setting="log_level",
        ))
    return Ok(level)


def load_config(
    environ: Mapping[str, str],
    base: EngineConfig | None = None,
) -> Ok[EngineConfig] | Err[ConfigError]:
    """Overlay PAYTALLY_* environment values onto base (defaults if None)."""
    config = base if base is not None else EngineConfig()

    raw_policy = environ.get(ENV_ERROR_POLICY)
    if raw_policy:
        match parse_error_policy(raw_policy):
            case Err() as err:
                return err
            case Ok(policy):
                config = replace(config, error_policy=policy)

    raw_level = environ.get(ENV_LOG_LEVEL)
    if raw_level:
        match parse_log_level(raw_level):
            case Err() as err:
                return err
            case Ok(level):
                config = replace(config, log_level=level)

    return Ok(config)
