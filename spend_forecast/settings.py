from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from . import config
from .engine_config import EngineConfig
from .holt import HoltSmoother
from .policies import backfill_missing_with_holt, use_pretrained_verbatim
from .pretrained import load_pretrained_artifact


class ForecastSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FORECAST_")

    artifact_path: Optional[Path] = None
    holt_alpha: float = Field(config.HOLT_ALPHA, ge=0.0, le=1.0)
    holt_beta: float = Field(config.HOLT_BETA, ge=0.0, le=1.0)
    target_savings_rate: float = Field(config.TARGET_SAVINGS_RATE, ge=0.0, le=1.0)
    income_months: int = Field(config.AVG_INCOME_MONTHS, ge=1)
    backfill_missing_models: bool = False
    log_level: str = "INFO"


@lru_cache()
def get_settings() -> ForecastSettings:
    return ForecastSettings()


def build_engine_config(settings: ForecastSettings | None = None) -> EngineConfig:
    """Собирает EngineConfig из настроек; артефакт читается здесь один раз."""
    settings = settings or get_settings()
    config = EngineConfig(
        smoother=HoltSmoother(alpha=settings.holt_alpha, beta=settings.holt_beta),
        target_savings_rate=settings.target_savings_rate,
        income_months=settings.income_months,
        selection_policy=(
            backfill_missing_with_holt
            if settings.backfill_missing_models
            else use_pretrained_verbatim
        ),
    )
    return config.with_artifact(load_pretrained_artifact(settings.artifact_path))
