import json
import math

import pytest

from spend_forecast import SpendingForecastService
from spend_forecast.config import NO_HISTORY_NOTE
from spend_forecast.dto import ForecastMethod, MonthlyCategoryTotal, PretrainedArtifact, PretrainedCategoryModel
from spend_forecast.engine_config import EngineConfig
from spend_forecast.schemas import ForecastReportResponse
from spend_forecast.synthetic import generate_monthly_totals


def _totals(*rows):
    return [MonthlyCategoryTotal(*row) for row in rows]


def test_empty_totals_give_explicit_no_history_report():
    report = SpendingForecastService().report([])

    assert report.history == ()
    assert report.forecast is None
    assert report.safe_to_spend is None
    assert report.note == NO_HISTORY_NOTE
    assert not report.has_history


def test_two_month_report():
    report = SpendingForecastService().report(
        _totals(
            ("2024-01-01", "Dining", 100.0),
            ("2024-02-01", "Dining", 120.0),
            ("2024-01-01", "Income", -2000.0),
            ("2024-02-01", "Income", -3000.0),
        )
    )

    assert report.note is None
    assert [h.month_key for h in report.history] == ["2024-01-01", "2024-02-01"]
    assert report.forecast.next_month_key == "2024-03-01"
    assert report.forecast.total_predicted == pytest.approx(140.0)

    safe = report.safe_to_spend
    assert safe.avg_monthly_income == pytest.approx(2500.0)
    assert safe.safe_total_budget == pytest.approx(2000.0)
    budgets = {b.category: b.safe_budget for b in safe.per_category}
    assert budgets["Dining"] == pytest.approx(2000.0)
    assert "Income" not in budgets


def test_single_month_report_uses_naive_forecast():
    report = SpendingForecastService().report(_totals(("2024-01-01", "Dining", 50.0)))

    assert report.forecast.method is ForecastMethod.NAIVE
    assert report.forecast.next_month_key == "2024-02-01"
    assert [(f.category, f.predicted) for f in report.forecast.per_category] == [("Dining", 50.0)]
    # дохода нет
    assert report.safe_to_spend.avg_monthly_income is None
    assert report.safe_to_spend.per_category[0].predicted == 50.0


def test_partial_artifact_coverage_drops_uncovered_categories():
    artifact = PretrainedArtifact(
        version="test",
        trained_at="2025-01-01T00:00:00Z",
        categories={"Dining": PretrainedCategoryModel(0.0, (1.0,))},
    )
    report = SpendingForecastService(EngineConfig(artifact=artifact)).report(
        _totals(
            ("2024-01-01", "Dining", 100.0),
            ("2024-02-01", "Dining", 120.0),
            ("2024-01-01", "Transport", 40.0),
            ("2024-02-01", "Transport", 60.0),
        )
    )

    assert [f.category for f in report.forecast.per_category] == ["Dining"]
    assert [b.category for b in report.safe_to_spend.per_category] == ["Dining"]


def test_generator_input_is_consumed_once():
    rows = (t for t in _totals(("2024-01-01", "Dining", 10.0), ("2024-02-01", "Dining", 20.0)))
    report = SpendingForecastService().report(rows)
    assert len(report.history) == 2
    assert report.forecast is not None


@pytest.mark.parametrize("seed", [11, 12, 13])
def test_report_invariants_on_synthetic_data(seed):
    totals = generate_monthly_totals(months=18, skip_probability=0.2, random_state=seed)
    report = SpendingForecastService().report(totals)

    safe = report.safe_to_spend
    assert safe.avg_monthly_income is not None
    assert sum(b.safe_budget for b in safe.per_category) == pytest.approx(safe.safe_total_budget)
    for point in report.history:
        assert math.isfinite(point.total_actual)
        assert point.total_actual >= 0


def test_response_schema_uses_camel_case():
    report = SpendingForecastService().report(
        _totals(("2024-01-01", "Dining", 100.0), ("2024-02-01", "Dining", 120.0))
    )
    payload = json.loads(ForecastReportResponse.from_report(report).model_dump_json(by_alias=True))

    assert payload["forecast"]["nextMonthKey"] == "2024-03-01"
    assert payload["forecast"]["method"] == "holt"
    assert payload["safeToSpend"]["avgMonthlyIncome"] is None
    assert payload["history"][0]["perCategory"][0] == {"category": "Dining", "actual": 100.0}
    assert payload["note"] is None


def test_response_schema_for_empty_history():
    payload = ForecastReportResponse.from_report(SpendingForecastService().report([])).model_dump(by_alias=True)
    assert payload == {"history": [], "forecast": None, "safeToSpend": None, "note": NO_HISTORY_NOTE}


def test_income_only_month_reports_total_without_allocations():
    report = SpendingForecastService().report(_totals(("2024-01-01", "Income", -1000.0)))

    assert report.forecast.method == ForecastMethod.NAIVE
    assert report.forecast.per_category == ()
    assert report.safe_to_spend.safe_total_budget == pytest.approx(800.0)
    assert report.safe_to_spend.per_category == ()
