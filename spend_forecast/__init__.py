"""Прогноз расходов по категориям и безопасный бюджет на следующий месяц."""

from .budget import compute_safe_to_spend
from .dto import (
    Category,
    CategoryActual,
    CategoryBudget,
    CategoryForecast,
    CategorySeries,
    CategorySeriesPoint,
    ForecastMethod,
    ForecastReport,
    ForecastResult,
    HistoryPoint,
    MonthlyCategoryTotal,
    PretrainedArtifact,
    PretrainedCategoryModel,
    SafeToSpend,
)
from .engine_config import EngineConfig
from .errors import ForecastError, InvalidMonthKeyError, MalformedArtifactError
from .forecast import ForecastOrchestrator, forecast_per_category, naive_persistence_forecast
from .history import build_history
from .holt import HoltSmoother, holt_linear_predict
from .pretrained import LagModelPredictor, load_pretrained_artifact
from .series import build_category_series
from .service import SpendingForecastService

__all__ = [
    "Category",
    "CategoryActual",
    "CategoryBudget",
    "CategoryForecast",
    "CategorySeries",
    "CategorySeriesPoint",
    "EngineConfig",
    "ForecastError",
    "ForecastMethod",
    "ForecastOrchestrator",
    "ForecastReport",
    "ForecastResult",
    "HistoryPoint",
    "HoltSmoother",
    "InvalidMonthKeyError",
    "LagModelPredictor",
    "MalformedArtifactError",
    "MonthlyCategoryTotal",
    "PretrainedArtifact",
    "PretrainedCategoryModel",
    "SafeToSpend",
    "SpendingForecastService",
    "build_category_series",
    "build_history",
    "compute_safe_to_spend",
    "forecast_per_category",
    "holt_linear_predict",
    "load_pretrained_artifact",
    "naive_persistence_forecast",
]

__version__ = "0.1.0"
