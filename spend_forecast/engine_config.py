"""Неизменяемая конфигурация движка, которая явно передаётся в каждый вызов."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from .config import AVG_INCOME_MONTHS, MIN_MONTHS_FOR_MODELS, TARGET_SAVINGS_RATE
from .dto import PretrainedArtifact
from .holt import HoltSmoother
from .policies import (
    LagPaddingPolicy,
    SelectionPolicy,
    ZeroSumAllocationPolicy,
    equal_split,
    pad_with_oldest,
    use_pretrained_verbatim,
)


@dataclass(frozen=True, slots=True)
class EngineConfig:
    artifact: PretrainedArtifact | None = None
    smoother: HoltSmoother = field(default_factory=HoltSmoother)
    target_savings_rate: float = TARGET_SAVINGS_RATE
    income_months: int = AVG_INCOME_MONTHS
    min_months_for_models: int = MIN_MONTHS_FOR_MODELS
    selection_policy: SelectionPolicy = use_pretrained_verbatim
    lag_padding: LagPaddingPolicy = pad_with_oldest
    zero_sum_allocation: ZeroSumAllocationPolicy = equal_split

    def with_artifact(self, artifact: PretrainedArtifact | None) -> EngineConfig:
        return replace(self, artifact=artifact)


DEFAULT_CONFIG = EngineConfig()
