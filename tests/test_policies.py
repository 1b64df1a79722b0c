import pytest

from spend_forecast.dto import CategoryForecast, ForecastMethod
from spend_forecast.policies import (
    backfill_missing_with_holt,
    equal_split,
    pad_with_oldest,
    pad_with_zero,
    use_pretrained_verbatim,
)


def _fallback():
    return [CategoryForecast("Dining", 1.0), CategoryForecast("Transport", 2.0)]


@pytest.mark.parametrize("lag, expected", [(0, 30.0), (1, 20.0), (2, 10.0), (3, 10.0), (10, 10.0)])
def test_pad_with_oldest(lag, expected):
    assert pad_with_oldest([10.0, 20.0, 30.0], lag) == expected


def test_pad_with_zero():
    assert pad_with_zero([10.0, 20.0], 1) == 10.0
    assert pad_with_zero([10.0, 20.0], 2) == 0.0


def test_equal_split():
    assert equal_split([0.0, 0.0, 0.0, 0.0]) == [0.25] * 4
    assert equal_split([]) == []


def test_verbatim_policy_does_not_call_fallback_when_pretrained_present():
    def fallback():
        raise AssertionError("fallback must not be used")

    pretrained = [CategoryForecast("Dining", 5.0)]
    assert use_pretrained_verbatim(pretrained, fallback) == (pretrained, ForecastMethod.PRETRAINED)


@pytest.mark.parametrize("pretrained", [None, []])
def test_verbatim_policy_falls_back_on_missing_or_empty(pretrained):
    assert use_pretrained_verbatim(pretrained, _fallback) == (_fallback(), ForecastMethod.HOLT)


def test_backfill_policy():
    result, method = backfill_missing_with_holt([CategoryForecast("Dining", 5.0)], _fallback)
    assert method is ForecastMethod.PRETRAINED_WITH_HOLT
    assert result == [CategoryForecast("Dining", 5.0), CategoryForecast("Transport", 2.0)]


def test_backfill_policy_with_full_coverage():
    pretrained = [CategoryForecast("Dining", 5.0), CategoryForecast("Transport", 6.0)]
    assert backfill_missing_with_holt(pretrained, _fallback) == (pretrained, ForecastMethod.PRETRAINED)
