"""Environment-driven configuration for the remote autopilot service."""

import os
from dataclasses import dataclass

from .errors import ConfigurationError

DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_CONCURRENCY = 8


@dataclass(frozen=True)
class RemoteConfig:
    """Connection settings passed explicitly into the remote client."""

    base_url: str
    timeout: float = DEFAULT_TIMEOUT
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY


def get_autopilot_url() -> str:
    """Return the autopilot service base URL, without a trailing slash."""
    url = os.environ.get("AUTOPILOT_AI_URL", "").strip()
    if not url:
        raise ConfigurationError("AUTOPILOT_AI_URL is not set")
    return url.rstrip("/")


def get_timeout() -> float:
    env = os.environ.get("AUTOPILOT_TIMEOUT")
    if not env:
        return DEFAULT_TIMEOUT
    try:
        return float(env)
    except ValueError:
        raise ConfigurationError(f"AUTOPILOT_TIMEOUT is not a number: {env!r}")


def get_max_concurrency() -> int:
    env = os.environ.get("AUTOPILOT_MAX_CONCURRENCY")
    if not env:
        return DEFAULT_MAX_CONCURRENCY
    try:
        value = int(env)
    except ValueError:
        raise ConfigurationError(f"AUTOPILOT_MAX_CONCURRENCY is not an integer: {env!r}")
    if value < 1:
        raise ConfigurationError("AUTOPILOT_MAX_CONCURRENCY must be at least 1")
    return value


def get_remote_config(base_url: str | None = None) -> RemoteConfig:
    """Build a RemoteConfig from the environment.

    An explicit ``base_url`` takes precedence over AUTOPILOT_AI_URL.
    """
    url = base_url.rstrip("/") if base_url else get_autopilot_url()
    return RemoteConfig(
        base_url=url,
        timeout=get_timeout(),
        max_concurrency=get_max_concurrency(),
    )
