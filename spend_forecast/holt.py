"""
Двойное экспоненциальное сглаживание (линейный метод Холта).

Используется как запасной прогноз, когда предобученной модели нет
или она не дала ни одного предсказания.
"""
from dataclasses import dataclass
from operator import attrgetter
from typing import Sequence

from .config import HOLT_ALPHA, HOLT_BETA
from .dto import CategorySeriesPoint


@dataclass(frozen=True, slots=True)
class HoltSmoother:
    """
    alpha — вес нового наблюдения в уровне,
    beta — вес нового приращения уровня в тренде.
    """
    alpha: float = HOLT_ALPHA
    beta: float = HOLT_BETA

    def predict(
        self,
        points: Sequence[CategorySeriesPoint],
        next_index: int | None = None,
    ) -> float:
        """
        Прогноз на месяц с глобальным индексом next_index.

        По умолчанию next_index = последний индекс + 1. Если в конце ряда
        пропущены месяцы, тренд экстраполируется на весь разрыв.
        """
        ordered = sorted(points, key=attrgetter("index"))
        n = len(ordered)
        if n == 0:
            return 0.0
        if n == 1:
            return float(ordered[0].amount)

        level = ordered[0].amount
        trend = ordered[1].amount - ordered[0].amount

        for point in ordered[1:]:
            prev_level = level
            level = self.alpha * point.amount + (1 - self.alpha) * (level + trend)
            trend = self.beta * (level - prev_level) + (1 - self.beta) * trend

        last_index = ordered[-1].index
        target = last_index + 1 if next_index is None else max(next_index, last_index + 1)
        return float(level + trend * (target - last_index))


def holt_linear_predict(
    points: Sequence[CategorySeriesPoint],
    alpha: float = HOLT_ALPHA,
    beta: float = HOLT_BETA,
    next_index: int | None = None,
) -> float:
    return HoltSmoother(alpha=alpha, beta=beta).predict(points, next_index=next_index)
