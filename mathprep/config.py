from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Any

from loguru import logger

from mathprep.errors import ConfigurationError

_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class PreprocessorConfig:
    """Settings owned by whoever drives the preprocessor.

    The formula pipeline itself is stateless; this only controls how batches
    are fanned out and how chatty logging is.
    """

    # 1 processes a batch serially on the calling thread.
    max_workers: int = 1
    log_level: str = "WARNING"

    def __post_init__(self):
        if isinstance(self.max_workers, bool) or not isinstance(self.max_workers, int):
            raise ConfigurationError(
                f"max_workers must be an integer, got {self.max_workers!r}"
            )
        if self.max_workers < 1:
            raise ConfigurationError(
                f"max_workers must be >= 1, got {self.max_workers}"
            )
        level = str(self.log_level).upper()
        if level not in _LOG_LEVELS:
            raise ConfigurationError(
                f"Unknown log level {self.log_level!r}; expected one of {', '.join(_LOG_LEVELS)}"
            )
        object.__setattr__(self, "log_level", level)

    @classmethod
    def from_env(cls) -> "PreprocessorConfig":
        """Build a config from ``MATHPREP_MAX_WORKERS`` and ``MATHPREP_LOG_LEVEL``."""

        kwargs: dict[str, Any] = {}

        raw_workers = (os.getenv("MATHPREP_MAX_WORKERS") or "").strip()
        if raw_workers:
            try:
                kwargs["max_workers"] = int(raw_workers)
            except ValueError as e:
                raise ConfigurationError(
                    f"MATHPREP_MAX_WORKERS must be an integer, got {raw_workers!r}"
                ) from e

        raw_level = (os.getenv("MATHPREP_LOG_LEVEL") or "").strip()
        if raw_level:
            kwargs["log_level"] = raw_level

        return cls(**kwargs)

    def apply_logging(self, sink: Any = None) -> int:
        """Route loguru output to ``sink`` at this config's ``log_level``."""
        return configure_logging(self.log_level, sink)


def configure_logging(level: str = "WARNING", sink: Any = None) -> int:
    """Replace loguru's handlers with a single ``sink`` at ``level``.

    ``sink`` defaults to the current ``sys.stderr``. Returns the id of the new
    handler.
    """

    logger.remove()
    return logger.add(sink if sink is not None else sys.stderr, level=level.upper())
