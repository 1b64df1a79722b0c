"""
Расчёт «безопасного к трате» бюджета.

Средний доход за последние месяцы, уменьшенный на целевую норму
сбережений, распределяется по категориям пропорционально прогнозу.
"""
import logging
import math
from typing import List, Sequence

import numpy as np

from .config import INCOME_CATEGORY
from .dto import CategoryBudget, CategorySeries, ForecastResult, SafeToSpend
from .engine_config import DEFAULT_CONFIG, EngineConfig

logger = logging.getLogger(__name__)


def find_income_series(series: Sequence[CategorySeries]) -> CategorySeries | None:
    """Точное совпадение имени 'income' без учёта регистра, иначе первое имя, содержащее 'income'."""
    needle = INCOME_CATEGORY.lower()
    for cat_series in series:
        if cat_series.category.lower() == needle:
            return cat_series
    for cat_series in series:
        if needle in cat_series.category.lower():
            return cat_series
    return None


def average_monthly_income(
    series: Sequence[CategorySeries],
    months: int = DEFAULT_CONFIG.income_months,
) -> float | None:
    """
    Среднее абсолютных сумм дохода за последние `months` наблюдённых месяцев.

    Если наблюдений меньше, берётся сколько есть. None, если наблюдений нет
    совсем, если среднее нулевое или не конечное.
    """
    income = find_income_series(series)
    if income is None or not income.points or months <= 0:
        return None

    recent = sorted(income.points, key=lambda p: p.index)[-months:]
    avg = float(np.mean(np.abs([p.amount for p in recent])))
    if avg == 0 or not math.isfinite(avg):
        return None
    return avg


def allocation_ratios(
    predicted: Sequence[float],
    config: EngineConfig = DEFAULT_CONFIG,
) -> List[float]:
    weights = [max(0.0, p) for p in predicted]
    total = math.fsum(weights)
    if total > 0 and math.isfinite(total):
        return [w / total for w in weights]
    return config.zero_sum_allocation(weights)


def compute_safe_to_spend(
    forecast: ForecastResult,
    series: Sequence[CategorySeries],
    config: EngineConfig = DEFAULT_CONFIG,
) -> SafeToSpend:
    avg_income = average_monthly_income(series, months=config.income_months)

    if avg_income is None:
        logger.info("Доход не найден: бюджет по категориям не рассчитывается.")
        return SafeToSpend(
            target_savings_rate=config.target_savings_rate,
            avg_monthly_income=None,
            safe_total_budget=None,
            per_category=tuple(
                CategoryBudget(category=f.category, predicted=f.predicted, safe_budget=None)
                for f in forecast.per_category
            ),
        )

    safe_total = avg_income * (1 - config.target_savings_rate)
    ratios = allocation_ratios([f.predicted for f in forecast.per_category], config)
    per_category = tuple(
        CategoryBudget(category=f.category, predicted=f.predicted, safe_budget=safe_total * ratio)
        for f, ratio in zip(forecast.per_category, ratios)
    )
    return SafeToSpend(
        target_savings_rate=config.target_savings_rate,
        avg_monthly_income=avg_income,
        safe_total_budget=safe_total,
        per_category=per_category,
    )
