"""
Оркестратор прогноза на следующий месяц.

Порядок выбора пути:
    1. меньше двух различных месяцев в датасете -> наивный прогноз
       (последнее наблюдение категории), артефакт игнорируется;
    2. иначе политика выбора решает между предсказаниями лаг-модели
       и сглаживанием Холта (по умолчанию: непустой список лаг-модели
       берётся как есть).
"""
import logging
from typing import List, Sequence

import numpy as np

from .dto import CategoryForecast, CategorySeries, ForecastMethod, ForecastResult
from .engine_config import DEFAULT_CONFIG, EngineConfig
from .holt import HoltSmoother
from .pretrained import LagModelPredictor
from .series import is_income, next_month_key, next_slot_index, observed_month_keys

logger = logging.getLogger(__name__)


def total_predicted(per_category: Sequence[CategoryForecast]) -> float:
    """Сумма прогнозов, где отрицательные значения считаются нулём."""
    if not per_category:
        return 0.0
    values = np.fromiter((f.predicted for f in per_category), dtype=float, count=len(per_category))
    return float(np.clip(values, 0.0, None).sum())


def naive_persistence_forecast(series: Sequence[CategorySeries]) -> List[CategoryForecast]:
    """Прогноз = последнее наблюдение; категории без наблюдений пропускаются."""
    forecasts: List[CategoryForecast] = []
    for cat_series in series:
        if is_income(cat_series.category) or not cat_series.points:
            continue
        last = max(cat_series.points, key=lambda p: p.index)
        forecasts.append(CategoryForecast(category=cat_series.category, predicted=float(last.amount)))
    return forecasts


def holt_forecast(
    series: Sequence[CategorySeries],
    smoother: HoltSmoother,
    next_index: int | None = None,
) -> List[CategoryForecast]:
    return [
        CategoryForecast(
            category=cat_series.category,
            predicted=smoother.predict(cat_series.points, next_index=next_index),
        )
        for cat_series in series
        if not is_income(cat_series.category)
    ]


class ForecastOrchestrator:
    def __init__(self, config: EngineConfig = DEFAULT_CONFIG) -> None:
        self.config = config
        self._predictor = LagModelPredictor(config.artifact, padding=config.lag_padding)

    def forecast(self, series: Sequence[CategorySeries]) -> ForecastResult | None:
        """
        Прогноз по рядам категорий.

        Возвращает None, если в рядах нет ни одного наблюдения: это
        «нет истории», а не нулевой прогноз.
        """
        months = observed_month_keys(series)
        if not months:
            logger.info("Нет истории: прогноз не строится.")
            return None

        if len(months) < self.config.min_months_for_models:
            per_category = naive_persistence_forecast(series)
            method = ForecastMethod.NAIVE
        else:
            next_index = next_slot_index(series)
            per_category, method = self.config.selection_policy(
                self._predictor.predict(series),
                lambda: holt_forecast(series, self.config.smoother, next_index=next_index),
            )

        logger.debug(
            "Прогноз построен методом %s по %d категориям (месяцев истории: %d).",
            method.value,
            len(per_category),
            len(months),
        )
        return ForecastResult(
            next_month_key=next_month_key(months[-1]),
            per_category=tuple(per_category),
            total_predicted=total_predicted(per_category),
            method=method,
        )


def forecast_per_category(
    series: Sequence[CategorySeries],
    config: EngineConfig = DEFAULT_CONFIG,
) -> ForecastResult | None:
    return ForecastOrchestrator(config).forecast(series)
