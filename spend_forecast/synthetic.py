"""
Синтетические месячные агрегаты для тестов и бенчмарков.

Расходы по каждой категории — базовый уровень + линейный тренд + шум,
доход идёт отрицательными суммами (как в выгрузке из банка).
"""
from typing import Dict, List, Sequence

import numpy as np
import pandas as pd

from .config import CANONICAL_CATEGORIES, INCOME_CATEGORY, MONTH_KEY_FORMAT
from .dto import MonthlyCategoryTotal

DEFAULT_BASE_LEVELS: Dict[str, float] = {
    "Dining": 220.0,
    "Groceries": 480.0,
    "Subscriptions": 45.0,
    "Transport": 160.0,
    "Uncategorized": 90.0,
    "Other": 130.0,
}


def generate_monthly_totals(
    months: int = 12,
    start: str = "2023-01-01",
    categories: Sequence[str] | None = None,
    income: float = 4200.0,
    skip_probability: float = 0.0,
    random_state: int = 42,
) -> List[MonthlyCategoryTotal]:
    """
    :param months: сколько календарных месяцев сгенерировать.
    :param categories: категории расходов (по умолчанию канонические без Income).
    :param income: средний месячный доход; 0 — без дохода.
    :param skip_probability: вероятность пропустить месяц у категории расходов.
    """
    rng = np.random.default_rng(random_state)
    if categories is None:
        categories = [c for c in CANONICAL_CATEGORIES if c != INCOME_CATEGORY]

    month_keys = [
        ts.strftime(MONTH_KEY_FORMAT)
        for ts in pd.date_range(start=start, periods=months, freq="MS")
    ]

    totals: List[MonthlyCategoryTotal] = []
    for category in categories:
        base = DEFAULT_BASE_LEVELS.get(category, float(rng.uniform(50, 300)))
        slope = float(rng.normal(0.0, base * 0.02))
        for step, month_key in enumerate(month_keys):
            if skip_probability and rng.random() < skip_probability:
                continue
            amount = base + slope * step + float(rng.normal(0.0, base * 0.1))
            totals.append(MonthlyCategoryTotal(month_key, category, round(amount, 2)))

    if income:
        for month_key in month_keys:
            amount = -abs(income + float(rng.normal(0.0, income * 0.03)))
            totals.append(MonthlyCategoryTotal(month_key, INCOME_CATEGORY, round(amount, 2)))

    return totals


def totals_to_records(totals: Sequence[MonthlyCategoryTotal]) -> List[dict]:
    return [
        {"monthKey": t.month_key, "category": str(t.category), "totalAmount": t.total_amount}
        for t in totals
    ]
