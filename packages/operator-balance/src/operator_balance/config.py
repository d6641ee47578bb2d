"""Environment-based configuration for the balance scheduler."""

from pydantic import model_validator
from pydantic_settings import BaseSettings


class BalanceSettings(BaseSettings):
    """Balance scheduler configuration.

    All settings can be overridden via environment variables with
    BALANCE_ prefix. For example:
        BALANCE_TAINT_TTL_SECONDS=120
        BALANCE_TAINT_GC_INTERVAL_SECONDS=2
    """

    # Taint cache sweep cadence; must be shorter than the TTL
    taint_gc_interval_seconds: float = 5.0
    taint_ttl_seconds: float = 300.0  # 5 minutes

    model_config = {"env_prefix": "BALANCE_"}

    @model_validator(mode="after")
    def _check_taint_timings(self) -> "BalanceSettings":
        if self.taint_gc_interval_seconds <= 0 or self.taint_ttl_seconds <= 0:
            raise ValueError("taint cache timings must be positive")
        if self.taint_gc_interval_seconds >= self.taint_ttl_seconds:
            raise ValueError(
                "taint_gc_interval_seconds must be shorter than taint_ttl_seconds"
            )
        return self


settings = BalanceSettings()
