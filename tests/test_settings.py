import json

import pytest
from pydantic import ValidationError

from spend_forecast.policies import backfill_missing_with_holt, use_pretrained_verbatim
from spend_forecast.settings import ForecastSettings, build_engine_config


def test_defaults():
    config = build_engine_config(ForecastSettings())

    assert config.artifact is None
    assert config.smoother.alpha == 0.6
    assert config.smoother.beta == 0.3
    assert config.target_savings_rate == 0.2
    assert config.income_months == 3
    assert config.selection_policy is use_pretrained_verbatim


def test_environment_overrides(monkeypatch, tmp_path):
    artifact = tmp_path / "model.json"
    artifact.write_text(
        json.dumps({"version": "env", "trainedAt": "2025-01-01", "categories": {}}),
        encoding="utf-8",
    )
    monkeypatch.setenv("FORECAST_ARTIFACT_PATH", str(artifact))
    monkeypatch.setenv("FORECAST_HOLT_ALPHA", "0.5")
    monkeypatch.setenv("FORECAST_TARGET_SAVINGS_RATE", "0.1")
    monkeypatch.setenv("FORECAST_BACKFILL_MISSING_MODELS", "true")

    config = build_engine_config(ForecastSettings())

    assert config.artifact is not None
    assert config.artifact.version == "env"
    assert config.smoother.alpha == 0.5
    assert config.target_savings_rate == 0.1
    assert config.selection_policy is backfill_missing_with_holt


def test_broken_artifact_in_settings_is_ignored(tmp_path):
    artifact = tmp_path / "model.json"
    artifact.write_text("{broken", encoding="utf-8")
    assert build_engine_config(ForecastSettings(artifact_path=artifact)).artifact is None


def test_invalid_values_are_rejected():
    with pytest.raises(ValidationError):
        ForecastSettings(holt_alpha=1.5)
    with pytest.raises(ValidationError):
        ForecastSettings(income_months=0)


def test_artifact_is_attached_to_configured_engine(tmp_path):
    artifact = tmp_path / "model.json"
    artifact.write_text(
        json.dumps({
            "version": "attached",
            "trainedAt": "2025-01-01",
            "categories": {"Dining": {"intercept": 1.0, "lags": [0.5]}},
        }),
        encoding="utf-8",
    )
    config = build_engine_config(ForecastSettings(artifact_path=artifact, target_savings_rate=0.3))

    assert config.artifact.version == "attached"
    assert config.artifact.model_for("Dining").lags == (0.5,)
    assert config.target_savings_rate == 0.3
    assert config.with_artifact(None).artifact is None
    assert config.with_artifact(None).target_savings_rate == 0.3
