"""
Предобученная линейная лаг-модель.

Идея:
    - артефакт — внешний документ с коэффициентами по категориям
      (JSON, либо joblib-файл с тем же словарём внутри);
    - любая ошибка чтения/разбора превращается в «артефакта нет»,
      и движок уходит на запасной прогноз;
    - предсказание = intercept + Σ lags[i] * (i+1)-е с конца наблюдение.

Пример:

    from spend_forecast.pretrained import LagModelPredictor, load_pretrained_artifact

    artifact = load_pretrained_artifact("model_artifacts/pretrained.json")
    predictions = LagModelPredictor(artifact).predict(series)
    # None -> артефакта нет, нужен fallback
"""
import json
import logging
from operator import attrgetter
from pathlib import Path
from typing import Any, List, Sequence

import joblib
import numpy as np
from pydantic import ValidationError

from .dto import CategoryForecast, CategorySeries, CategorySeriesPoint, PretrainedArtifact, PretrainedCategoryModel
from .errors import MalformedArtifactError
from .policies import LagPaddingPolicy, pad_with_oldest
from .schemas import ArtifactDocument
from .series import is_income

logger = logging.getLogger(__name__)

JOBLIB_SUFFIXES = {".joblib", ".pkl"}


# ---------- Загрузка артефакта ----------

def load_pretrained_artifact(path: Path | str | None) -> PretrainedArtifact | None:
    """
    Загружает артефакт лаг-модели.

    Никогда не бросает исключений: отсутствующий или битый файл
    означает, что артефакта нет.
    """
    if path is None:
        return None

    path = Path(path)
    try:
        found = path.is_file()
    except OSError:
        found = False
    if not found:
        logger.info("Артефакт лаг-модели не найден: %s", path)
        return None

    try:
        artifact = parse_artifact(_read_payload(path))
    except MalformedArtifactError as exc:
        logger.warning("Артефакт %s проигнорирован: %s", path, exc.detail)
        return None

    logger.info(
        "Загружен артефакт лаг-модели %s (version=%s, категорий: %d)",
        path,
        artifact.version,
        len(artifact.categories),
    )
    return artifact


def _read_payload(path: Path) -> Any:
    if path.suffix.lower() in JOBLIB_SUFFIXES:
        try:
            return joblib.load(path)
        except Exception as exc:  # joblib/pickle бросают что угодно
            raise MalformedArtifactError(f"не удалось прочитать joblib ({exc})") from exc

    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        raise MalformedArtifactError(f"не удалось прочитать JSON ({exc})") from exc


def parse_artifact(payload: Any) -> PretrainedArtifact:
    """Валидирует словарь артефакта и превращает его в PretrainedArtifact."""
    if not isinstance(payload, dict):
        raise MalformedArtifactError(
            f"ожидался объект, получено {type(payload).__name__}"
        )
    try:
        document = ArtifactDocument.model_validate(payload)
    except ValidationError as exc:
        raise MalformedArtifactError(f"неверная структура ({exc.error_count()} ошибок)") from exc
    return document.to_artifact()


# ---------- Предсказание ----------

class LagModelPredictor:
    """
    Применяет коэффициенты артефакта к последним наблюдениям каждой категории.

    predict(series) возвращает:
        - None, если артефакт не загружен (сигнал использовать fallback);
        - список прогнозов по категориям, кроме Income; категории, для которых
          нет ни своей модели, ни default, в список не попадают.
    """

    def __init__(
        self,
        artifact: PretrainedArtifact | None,
        padding: LagPaddingPolicy = pad_with_oldest,
    ) -> None:
        self.artifact = artifact
        self._padding = padding

    def predict(self, series: Sequence[CategorySeries]) -> List[CategoryForecast] | None:
        if self.artifact is None:
            return None

        predictions: List[CategoryForecast] = []
        skipped: List[str] = []
        for cat_series in series:
            if is_income(cat_series.category):
                continue
            model = self.artifact.model_for(cat_series.category)
            if model is None:
                skipped.append(cat_series.category)
                continue
            predictions.append(
                CategoryForecast(
                    category=cat_series.category,
                    predicted=self.predict_one(model, cat_series.points),
                )
            )

        if skipped:
            logger.debug("Нет лаг-модели для категорий: %s", ", ".join(skipped))
        return predictions

    def predict_one(
        self,
        model: PretrainedCategoryModel,
        points: Sequence[CategorySeriesPoint],
    ) -> float:
        if not points:
            return 0.0

        amounts = [p.amount for p in sorted(points, key=attrgetter("index"))]
        features = np.array(
            [self._padding(amounts, lag) for lag in range(len(model.lags))],
            dtype=float,
        )
        coefs = np.asarray(model.lags, dtype=float)
        return float(model.intercept + np.dot(coefs, features))
