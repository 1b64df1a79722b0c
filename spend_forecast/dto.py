from dataclasses import dataclass, field
from enum import StrEnum
from typing import Mapping


class Category(StrEnum):
    DINING = "Dining"
    GROCERIES = "Groceries"
    SUBSCRIPTIONS = "Subscriptions"
    TRANSPORT = "Transport"
    UNCATEGORIZED = "Uncategorized"
    OTHER = "Other"
    INCOME = "Income"


class ForecastMethod(StrEnum):
    NAIVE = "naive"
    PRETRAINED = "pretrained"
    HOLT = "holt"
    PRETRAINED_WITH_HOLT = "pretrained_with_holt"


@dataclass(frozen=True, slots=True)
class MonthlyCategoryTotal:
    """
    Сумма операций одной категории за календарный месяц.

    month_key — первое число месяца строкой ('2025-06-01'),
    total_amount — знаковая сумма (доход и расход в одной колонке).
    """
    month_key: str
    category: Category | str
    total_amount: float


@dataclass(frozen=True, slots=True)
class CategorySeriesPoint:
    month_key: str
    index: int  # позиция месяца среди всех месяцев датасета, а не категории
    amount: float


@dataclass(frozen=True, slots=True)
class CategorySeries:
    category: str
    points: tuple[CategorySeriesPoint, ...] = ()

    @property
    def amounts(self) -> list[float]:
        return [p.amount for p in self.points]


@dataclass(frozen=True, slots=True)
class PretrainedCategoryModel:
    """Линейная лаг-модель: lags[i] — вес (i+1)-го с конца наблюдения."""
    intercept: float
    lags: tuple[float, ...] = ()


@dataclass(frozen=True, slots=True)
class PretrainedArtifact:
    version: str
    trained_at: str
    categories: Mapping[str, PretrainedCategoryModel] = field(default_factory=dict)
    default: PretrainedCategoryModel | None = None

    def model_for(self, category: str) -> PretrainedCategoryModel | None:
        model = self.categories.get(category)
        if model is None:
            return self.default
        return model


@dataclass(frozen=True, slots=True)
class CategoryForecast:
    category: str
    predicted: float


@dataclass(frozen=True, slots=True)
class ForecastResult:
    """
    Прогноз на следующий месяц.

    predicted в per_category не обрезаются, а total_predicted
    считается по max(0, predicted).
    """
    next_month_key: str
    per_category: tuple[CategoryForecast, ...]
    total_predicted: float
    method: ForecastMethod


@dataclass(frozen=True, slots=True)
class CategoryBudget:
    category: str
    predicted: float
    safe_budget: float | None


@dataclass(frozen=True, slots=True)
class SafeToSpend:
    target_savings_rate: float
    avg_monthly_income: float | None
    safe_total_budget: float | None
    per_category: tuple[CategoryBudget, ...]


@dataclass(frozen=True, slots=True)
class CategoryActual:
    category: str
    actual: float


@dataclass(frozen=True, slots=True)
class HistoryPoint:
    month_key: str
    per_category: tuple[CategoryActual, ...]
    total_actual: float


@dataclass(frozen=True, slots=True)
class ForecastReport:
    history: tuple[HistoryPoint, ...]
    forecast: ForecastResult | None
    safe_to_spend: SafeToSpend | None
    note: str | None = None

    @property
    def has_history(self) -> bool:
        return bool(self.history)
