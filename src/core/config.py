"""
Configuration for the chess engine.

- Reads settings from environment variables, falling back to defaults.
- Exposes SETTINGS with the knobs used across the project (log level, computer player strength/seed).
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Callable, Optional

DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _get(name: str, default: Any, cast: Optional[Callable[[str], Any]] = None) -> Any:
    env = os.environ.get(name)
    if env is None or env == "":
        return default
    return cast(env) if cast else env


@dataclass(frozen=True)
class Settings:
    log_level: str
    # 1: random legal move, 2: greedy scoring (anything else behaves like 1)
    computer_level: int
    # None: seeded from the OS
    computer_seed: Optional[int]


def load_settings() -> Settings:
    return Settings(
        log_level=str(_get("CHESS_LOG_LEVEL", "INFO")).upper(),
        computer_level=int(_get("CHESS_COMPUTER_LEVEL", 2, cast=int)),
        computer_seed=_get("CHESS_COMPUTER_SEED", None, cast=int),
    )


SETTINGS = load_settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Root logger setup for applications embedding the engine. The engine itself never calls this."""
    level_name = (level or SETTINGS.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO), format=DEFAULT_LOG_FORMAT
    )
