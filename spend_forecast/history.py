import logging
from typing import List, Sequence

from .dto import CategoryActual, HistoryPoint, MonthlyCategoryTotal
from .series import is_income, totals_to_frame

logger = logging.getLogger(__name__)


def build_history(totals: Sequence[MonthlyCategoryTotal]) -> List[HistoryPoint]:
    """
    Факт по месяцам для отображения.

    Суммы категорий отдаются как есть (включая Income), а total_actual —
    сумма max(0, actual) по всем категориям, кроме Income.
    """
    df = totals_to_frame(totals)
    if df.empty:
        return []

    history: List[HistoryPoint] = []
    for month_key, group in df.groupby("month_key", sort=True):
        spending = group.loc[~group["category"].map(is_income).astype(bool), "total_amount"]
        history.append(
            HistoryPoint(
                month_key=str(month_key),
                per_category=tuple(
                    CategoryActual(category=row.category, actual=float(row.total_amount))
                    for row in group.itertuples(index=False)
                ),
                total_actual=float(spending.clip(lower=0.0).sum()),
            )
        )

    logger.debug("История собрана: %d месяцев.", len(history))
    return history
