"""
Построение временных рядов по категориям из месячных агрегатов.

Содержит:
- нормализацию ключа месяца к формату YYYY-MM-01;
- сведение сырых агрегатов в DataFrame (month_key, category, total_amount);
- глобальную нумерацию месяцев и раскладку точек по категориям;
- вычисление ключа следующего месяца.
"""
import logging
import re
from datetime import date
from operator import attrgetter
from typing import Iterable, List, Sequence

import pandas as pd

from .config import CANONICAL_CATEGORIES, INCOME_CATEGORY, MONTH_KEY_FORMAT
from .dto import CategorySeries, CategorySeriesPoint, MonthlyCategoryTotal
from .errors import InvalidMonthKeyError

logger = logging.getLogger(__name__)

FRAME_COLUMNS = ["month_key", "category", "total_amount"]

_MONTH_KEY_RE = re.compile(r"^(\d{4})-(\d{2})(?:-(\d{2}))?$")


# ---------- Ключи месяцев ----------

def normalize_month_key(value: str | date) -> str:
    """
    Приводит ключ месяца к виду YYYY-MM-01.

    Принимает 'YYYY-MM', 'YYYY-MM-DD' или date. Всё остальное — ошибка:
    сортировка ключей строками корректна только при фиксированной ширине.
    """
    if isinstance(value, date):
        return value.strftime(MONTH_KEY_FORMAT)

    match = _MONTH_KEY_RE.match(str(value).strip())
    if match is None:
        raise InvalidMonthKeyError(f"Некорректный ключ месяца: {value!r}")
    year, month = match.group(1), match.group(2)
    if not 1 <= int(month) <= 12:
        raise InvalidMonthKeyError(f"Некорректный месяц в ключе: {value!r}")
    return f"{year}-{month}-01"


def next_month_key(month_key: str) -> str:
    """'2024-12-01' -> '2025-01-01'."""
    period = pd.Period(normalize_month_key(month_key)[:7], freq="M") + 1
    return period.start_time.strftime(MONTH_KEY_FORMAT)


def is_income(category: str) -> bool:
    return category.lower() == INCOME_CATEGORY.lower()


# ---------- Агрегаты -> DataFrame ----------

def totals_to_frame(totals: Iterable[MonthlyCategoryTotal]) -> pd.DataFrame:
    """
    Сводит агрегаты в DataFrame, отсортированный по (month_key, category).

    Повторяющиеся пары (месяц, категория) суммируются.
    Исходная последовательность не изменяется.
    """
    rows = [
        {
            "month_key": normalize_month_key(t.month_key),
            "category": str(t.category),
            "total_amount": float(t.total_amount),
        }
        for t in totals
    ]
    df = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    if df.empty:
        return df

    df = (
        df.groupby(["month_key", "category"], as_index=False, sort=True)["total_amount"]
        .sum()
        .reset_index(drop=True)
    )
    return df


def distinct_month_keys(df: pd.DataFrame) -> List[str]:
    return sorted(df["month_key"].unique().tolist())


# ---------- Ряды по категориям ----------

def build_category_series(totals: Sequence[MonthlyCategoryTotal]) -> List[CategorySeries]:
    """
    Раскладывает агрегаты по категориям.

    Индекс точки — номер месяца среди всех месяцев датасета, поэтому
    пропуски в истории одной категории видны как скачки индекса.
    Канонические категории присутствуют всегда (возможно, с пустым рядом),
    за ними идут прочие встреченные в данных категории.
    """
    df = totals_to_frame(totals)
    months = distinct_month_keys(df) if not df.empty else []
    month_index = {month_key: idx for idx, month_key in enumerate(months)}

    points_by_category: dict[str, list[CategorySeriesPoint]] = {}
    for row in df.itertuples(index=False):
        points_by_category.setdefault(row.category, []).append(
            CategorySeriesPoint(
                month_key=row.month_key,
                index=month_index[row.month_key],
                amount=float(row.total_amount),
            )
        )

    categories = list(dict.fromkeys([*CANONICAL_CATEGORIES, *points_by_category]))
    series = [
        CategorySeries(
            category=category,
            points=tuple(sorted(points_by_category.get(category, []), key=attrgetter("index"))),
        )
        for category in categories
    ]
    logger.debug(
        "Построено %d рядов по %d месяцам.", len(series), len(months)
    )
    return series


def observed_month_keys(series: Sequence[CategorySeries]) -> List[str]:
    """Все различные месяцы, встреченные хотя бы в одном ряду, по возрастанию."""
    return sorted({p.month_key for s in series for p in s.points})


def next_slot_index(series: Sequence[CategorySeries]) -> int:
    """Глобальный индекс месяца, на который строится прогноз."""
    indices = [p.index for s in series for p in s.points]
    return max(indices) + 1 if indices else 0
