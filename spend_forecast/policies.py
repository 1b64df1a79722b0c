"""
Заменяемые политики движка прогноза.

Каждая политика — обычная функция с фиксированной сигнатурой, чтобы
альтернативы можно было подставить через EngineConfig и тестировать отдельно.
"""
from typing import Callable, List, Sequence, Tuple

from .dto import CategoryForecast, ForecastMethod

LagPaddingPolicy = Callable[[Sequence[float], int], float]
ZeroSumAllocationPolicy = Callable[[Sequence[float]], List[float]]
SelectionPolicy = Callable[
    [Sequence[CategoryForecast] | None, Callable[[], List[CategoryForecast]]],
    Tuple[List[CategoryForecast], ForecastMethod],
]


# ---------- Лаги ----------

def pad_with_oldest(amounts: Sequence[float], lag: int) -> float:
    """
    Значение (lag+1)-го с конца наблюдения.

    amounts упорядочены от старых к новым. Если истории не хватает,
    подставляется самое раннее наблюдение.
    """
    if lag < len(amounts):
        return amounts[-1 - lag]
    return amounts[0]


def pad_with_zero(amounts: Sequence[float], lag: int) -> float:
    """Альтернатива: недостающие лаги считаются нулевыми."""
    if lag < len(amounts):
        return amounts[-1 - lag]
    return 0.0


# ---------- Распределение бюджета ----------

def equal_split(weights: Sequence[float]) -> List[float]:
    """Равные доли 1/n, когда сумма весов нулевая."""
    if not weights:
        return []
    share = 1.0 / len(weights)
    return [share] * len(weights)


# ---------- Выбор пути прогноза ----------

def use_pretrained_verbatim(
    pretrained: Sequence[CategoryForecast] | None,
    fallback: Callable[[], List[CategoryForecast]],
) -> Tuple[List[CategoryForecast], ForecastMethod]:
    """
    Непустой список предобученной модели берётся как есть.

    Категории без модели в таком прогнозе просто отсутствуют,
    fallback для них не вызывается.
    """
    if pretrained:
        return list(pretrained), ForecastMethod.PRETRAINED
    return fallback(), ForecastMethod.HOLT


def backfill_missing_with_holt(
    pretrained: Sequence[CategoryForecast] | None,
    fallback: Callable[[], List[CategoryForecast]],
) -> Tuple[List[CategoryForecast], ForecastMethod]:
    """Как use_pretrained_verbatim, но категории без модели добираются из fallback."""
    if not pretrained:
        return fallback(), ForecastMethod.HOLT

    covered = {f.category for f in pretrained}
    missing = [f for f in fallback() if f.category not in covered]
    if not missing:
        return list(pretrained), ForecastMethod.PRETRAINED
    return [*pretrained, *missing], ForecastMethod.PRETRAINED_WITH_HOLT
