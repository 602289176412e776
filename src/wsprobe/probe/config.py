from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_MESSAGES


class Settings(BaseSettings):
    """
    Runtime config.

    - Loaded from environment variables (`WSPROBE_*`)
    - Also reads `.env` if present (via pydantic-settings + python-dotenv)
    - `WSPROBE_MESSAGES` is a JSON list of strings
    """

    model_config = SettingsConfigDict(env_file=".env", env_prefix="WSPROBE_", extra="ignore")

    # Probe defaults (CLI arguments override these)
    url: str = "ws://0.0.0.0:3333"
    messages: list[str] = list(DEFAULT_MESSAGES)
    timeout_s: float = 5.0

    # Connection knobs passed to websockets.connect; None disables keepalive pings.
    ping_interval_s: float | None = 20.0
    ping_timeout_s: float | None = 20.0
    close_timeout_s: float = 1.0
    max_size: int = 2**22

    # Stub target server bind address
    target_host: str = "127.0.0.1"
    target_port: int = 3333

    # Debugging
    debug_log_msgs: bool = False


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
