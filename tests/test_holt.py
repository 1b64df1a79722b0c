import pytest

from spend_forecast.dto import CategorySeriesPoint
from spend_forecast.holt import HoltSmoother, holt_linear_predict


def _points(*amounts, start=0):
    return [
        CategorySeriesPoint(month_key=f"2024-{i + 1:02d}-01", index=start + i, amount=a)
        for i, a in enumerate(amounts)
    ]


def test_empty_series_predicts_zero():
    assert HoltSmoother().predict([]) == 0.0


def test_single_point_is_returned_as_is():
    assert HoltSmoother().predict(_points(100.0)) == 100.0
    # даже если до следующего слота несколько месяцев
    assert HoltSmoother().predict(_points(100.0), next_index=5) == 100.0


def test_two_points_follow_trend():
    # level=100, trend=20 -> шаг на 120: level=120, trend=20 -> 140
    assert HoltSmoother().predict(_points(100.0, 120.0)) == pytest.approx(140.0)


def test_three_points_hand_computed():
    # level=10, trend=10
    # y=20: level = 0.6*20 + 0.4*20 = 20, trend = 0.3*10 + 0.7*10 = 10
    # y=25: level = 0.6*25 + 0.4*30 = 27, trend = 0.3*7 + 0.7*10 = 9.1
    assert holt_linear_predict(_points(10.0, 20.0, 25.0)) == pytest.approx(36.1)


def test_constant_series_stays_flat():
    assert HoltSmoother().predict(_points(50.0, 50.0, 50.0, 50.0)) == pytest.approx(50.0)


def test_trailing_gap_extrapolates_over_all_missing_steps():
    points = _points(100.0, 120.0)  # индексы 0 и 1
    # следующий слот 4, значит три шага тренда
    assert HoltSmoother().predict(points, next_index=4) == pytest.approx(120.0 + 20.0 * 3)


def test_points_are_sorted_by_index_before_smoothing():
    ordered = _points(100.0, 120.0)
    assert HoltSmoother().predict(list(reversed(ordered))) == pytest.approx(140.0)


def test_custom_smoothing_constants():
    smoother = HoltSmoother(alpha=1.0, beta=0.0)
    # alpha=1 -> level = последнее наблюдение, beta=0 -> тренд не меняется
    assert smoother.predict(_points(10.0, 30.0, 35.0)) == pytest.approx(35.0 + 20.0)
