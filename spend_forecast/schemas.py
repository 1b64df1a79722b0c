"""Pydantic-схемы: документ артефакта и ответ для слоя отображения."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .dto import (
    ForecastReport,
    ForecastResult,
    HistoryPoint,
    PretrainedArtifact,
    PretrainedCategoryModel,
    SafeToSpend,
)


class APIModel(BaseModel):
    model_config = ConfigDict(
        protected_namespaces=(),
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
    )


# ---------- Артефакт предобученной модели ----------

class CategoryModelDocument(APIModel):
    intercept: float
    lags: List[float] = Field(default_factory=list)

    def to_model(self) -> PretrainedCategoryModel:
        return PretrainedCategoryModel(intercept=self.intercept, lags=tuple(self.lags))


class ArtifactDocument(APIModel):
    """
    {version, trainedAt, categories: {name -> {intercept, lags}}, default?}
    """
    version: str
    trained_at: str
    categories: Dict[str, CategoryModelDocument] = Field(default_factory=dict)
    default: Optional[CategoryModelDocument] = None

    def to_artifact(self) -> PretrainedArtifact:
        return PretrainedArtifact(
            version=self.version,
            trained_at=self.trained_at,
            categories={name: doc.to_model() for name, doc in self.categories.items()},
            default=self.default.to_model() if self.default is not None else None,
        )


# ---------- Ответ ----------

class CategoryForecastResponse(APIModel):
    category: str
    predicted: float


class ForecastResponse(APIModel):
    next_month_key: str
    per_category: List[CategoryForecastResponse]
    total_predicted: float
    method: str

    @classmethod
    def from_result(cls, result: ForecastResult) -> "ForecastResponse":
        return cls(
            next_month_key=result.next_month_key,
            per_category=[
                CategoryForecastResponse(category=f.category, predicted=f.predicted)
                for f in result.per_category
            ],
            total_predicted=result.total_predicted,
            method=result.method.value,
        )


class CategoryBudgetResponse(APIModel):
    category: str
    predicted: float
    safe_budget: Optional[float] = None


class SafeToSpendResponse(APIModel):
    target_savings_rate: float
    avg_monthly_income: Optional[float] = None
    safe_total_budget: Optional[float] = None
    per_category: List[CategoryBudgetResponse]

    @classmethod
    def from_result(cls, safe: SafeToSpend) -> "SafeToSpendResponse":
        return cls(
            target_savings_rate=safe.target_savings_rate,
            avg_monthly_income=safe.avg_monthly_income,
            safe_total_budget=safe.safe_total_budget,
            per_category=[
                CategoryBudgetResponse(
                    category=b.category, predicted=b.predicted, safe_budget=b.safe_budget
                )
                for b in safe.per_category
            ],
        )


class CategoryActualResponse(APIModel):
    category: str
    actual: float


class HistoryPointResponse(APIModel):
    month_key: str
    per_category: List[CategoryActualResponse]
    total_actual: float

    @classmethod
    def from_point(cls, point: HistoryPoint) -> "HistoryPointResponse":
        return cls(
            month_key=point.month_key,
            per_category=[
                CategoryActualResponse(category=a.category, actual=a.actual)
                for a in point.per_category
            ],
            total_actual=point.total_actual,
        )


class ForecastReportResponse(APIModel):
    history: List[HistoryPointResponse]
    forecast: Optional[ForecastResponse] = None
    safe_to_spend: Optional[SafeToSpendResponse] = None
    note: Optional[str] = None

    @classmethod
    def from_report(cls, report: ForecastReport) -> "ForecastReportResponse":
        return cls(
            history=[HistoryPointResponse.from_point(p) for p in report.history],
            forecast=(
                ForecastResponse.from_result(report.forecast)
                if report.forecast is not None
                else None
            ),
            safe_to_spend=(
                SafeToSpendResponse.from_result(report.safe_to_spend)
                if report.safe_to_spend is not None
                else None
            ),
            note=report.note,
        )
