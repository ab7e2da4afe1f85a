from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

REDUCING_BALANCE_RATE = 0.20


class EngineSettings(BaseSettings):
    """Environment configuration for the depreciation engine."""

    currency_symbol: str = Field(default="K", description="Symbol prefixed to formatted amounts.")
    reducing_balance_rate: float = Field(
        default=REDUCING_BALANCE_RATE,
        gt=0,
        le=1,
        description="Annual rate applied to the opening book value under reducing balance.",
    )
    log_level: str = Field(default="INFO", description="Level for the asset_ledger logger.")

    model_config = SettingsConfigDict(env_prefix="ASSET_LEDGER_", extra="ignore")


_settings: EngineSettings | None = None


def get_settings() -> EngineSettings:
    """Load settings lazily so tests can override them."""
    global _settings
    if _settings is None:
        _settings = EngineSettings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings; the next get_settings() call re-reads the environment."""
    global _settings
    _settings = None
