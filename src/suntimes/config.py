"""Environment-driven settings. Values may come from a .env file loaded by the entry point."""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from suntimes.compute import DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 120
DEFAULT_HEIGHT = 10


def _env_number(
    env: Mapping[str, str], name: str, kind: type[float] | type[int]
) -> float | int | None:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return kind(raw)
    except ValueError:
        logger.warning(
            "Unable to parse environment variable %s as %s: %s", name, kind.__name__, raw
        )
        return None


def _env_size(env: Mapping[str, str], name: str, default: int) -> int:
    value = _env_number(env, name, int)
    if value is None:
        return default
    if value < 1:
        logger.warning(
            "Environment variable %s must be a positive integer, got %s", name, value
        )
        return default
    return value


@dataclass(frozen=True)
class Settings:
    """Fallback location, plot size, and geocoder identity."""

    lat: float | None = None
    lng: float | None = None
    city: str | None = None
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        """Read SUNTIME_* variables. Unparseable numbers and sizes below 1 are logged and ignored."""
        env = os.environ if env is None else env
        return cls(
            lat=_env_number(env, "SUNTIME_LAT", float),
            lng=_env_number(env, "SUNTIME_LONG", float),
            city=env.get("SUNTIME_CITY") or None,
            width=_env_size(env, "SUNTIME_WIDTH", DEFAULT_WIDTH),
            height=_env_size(env, "SUNTIME_HEIGHT", DEFAULT_HEIGHT),
            user_agent=env.get("SUNTIME_USER_AGENT") or DEFAULT_USER_AGENT,
        )
