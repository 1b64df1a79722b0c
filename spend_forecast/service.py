from __future__ import annotations

import logging
from typing import Sequence

from .budget import compute_safe_to_spend
from .config import NO_HISTORY_NOTE
from .dto import ForecastReport, ForecastResult, MonthlyCategoryTotal
from .engine_config import DEFAULT_CONFIG, EngineConfig
from .forecast import ForecastOrchestrator
from .history import build_history
from .series import build_category_series

logger = logging.getLogger(__name__)


class SpendingForecastService:
    """
    Высокоуровневый сервис: месячные агрегаты -> история, прогноз, бюджет.

    Состояния между вызовами нет: всё, что нужно движку (артефакт,
    параметры сглаживания, политики), приходит в EngineConfig.

    .. code-block:: python

        from spend_forecast import MonthlyCategoryTotal, SpendingForecastService

        service = SpendingForecastService()
        report = service.report([
            MonthlyCategoryTotal("2024-01-01", "Dining", 100.0),
            MonthlyCategoryTotal("2024-02-01", "Dining", 120.0),
        ])
        report.forecast.next_month_key  # -> "2024-03-01"
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or DEFAULT_CONFIG
        self._orchestrator = ForecastOrchestrator(self.config)

    def forecast(self, totals: Sequence[MonthlyCategoryTotal]) -> ForecastResult | None:
        return self._orchestrator.forecast(build_category_series(totals))

    def report(self, totals: Sequence[MonthlyCategoryTotal]) -> ForecastReport:
        totals = list(totals)
        if not totals:
            return ForecastReport(history=(), forecast=None, safe_to_spend=None, note=NO_HISTORY_NOTE)

        series = build_category_series(totals)
        forecast = self._orchestrator.forecast(series)
        if forecast is None:
            return ForecastReport(history=(), forecast=None, safe_to_spend=None, note=NO_HISTORY_NOTE)

        history = build_history(totals)
        safe_to_spend = compute_safe_to_spend(forecast, series, self.config)
        logger.info(
            "Отчёт: %d мес. истории, прогноз на %s = %.2f (%s)",
            len(history),
            forecast.next_month_key,
            forecast.total_predicted,
            forecast.method.value,
        )
        return ForecastReport(
            history=tuple(history),
            forecast=forecast,
            safe_to_spend=safe_to_spend,
        )
