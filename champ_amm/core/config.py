"""Runtime settings read from the environment (and ``.env`` if present)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv  # type: ignore

_LOG_FORMATS = ("console", "json")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    default_liquidity: float = 100.0
    # bisection bracket is [0, collateral * multiplier]; 100 assumes prices >= 0.01
    search_bracket_multiplier: float = 100.0
    search_tolerance: float = 1e-4
    search_max_iterations: int = 200
    allow_negative_outstanding: bool = False
    log_level: str = "INFO"
    log_format: str = "console"

    def __post_init__(self):
        if not self.default_liquidity > 0:
            raise ValueError("default_liquidity must be positive")
        if not self.search_bracket_multiplier > 0:
            raise ValueError("search_bracket_multiplier must be positive")
        if not self.search_tolerance > 0:
            raise ValueError("search_tolerance must be positive")
        if self.search_max_iterations < 1:
            raise ValueError("search_max_iterations must be >= 1")
        if self.log_format not in _LOG_FORMATS:
            raise ValueError(f"log_format must be one of {_LOG_FORMATS}")

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "Settings":
        load_dotenv(dotenv_path)
        return cls(
            default_liquidity=_env_float("AMM_DEFAULT_LIQUIDITY", 100.0),
            search_bracket_multiplier=_env_float("AMM_SEARCH_BRACKET_MULTIPLIER", 100.0),
            search_tolerance=_env_float("AMM_SEARCH_TOLERANCE", 1e-4),
            search_max_iterations=_env_int("AMM_SEARCH_MAX_ITERATIONS", 200),
            allow_negative_outstanding=_env_flag("AMM_ALLOW_NEGATIVE_OUTSTANDING"),
            log_level=(os.getenv("AMM_LOG_LEVEL") or "INFO").upper(),
            log_format=(os.getenv("AMM_LOG_FORMAT") or "console").lower(),
        )
