"""
Отчёт прогноза из файла месячных агрегатов.

Запуск:
    python -m spend_forecast.report \
        --totals data/monthly_totals.csv \
        --artifact model_artifacts/pretrained.json

Файл агрегатов — CSV или JSON (массив записей) с колонками
monthKey, category, totalAmount. Результат печатается в stdout как JSON.
Параметры, не переданные явно, берутся из окружения (FORECAST_*).
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List

import pandas as pd

from .dto import MonthlyCategoryTotal
from .schemas import ForecastReportResponse
from .service import SpendingForecastService
from .settings import ForecastSettings, build_engine_config

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = {"monthKey", "category", "totalAmount"}


def load_monthly_totals(path: Path | str) -> List[MonthlyCategoryTotal]:
    """
    Читает агрегаты из CSV/JSON.

    :raises ValueError: если нет обязательных колонок.
    """
    path = Path(path)
    logger.info("Загружаю месячные агрегаты из %s", path)
    if path.suffix.lower() == ".json":
        df = pd.read_json(path, orient="records", dtype={"monthKey": str, "category": str})
    else:
        df = pd.read_csv(path, dtype={"monthKey": str, "category": str})

    if df.empty:
        return []

    missing = REQUIRED_COLUMNS - set(df.columns)
    if missing:
        raise ValueError(f"В файле агрегатов отсутствуют колонки: {sorted(missing)}")

    df["totalAmount"] = pd.to_numeric(df["totalAmount"], errors="coerce")
    df = df.dropna(subset=["monthKey", "category", "totalAmount"])
    logger.info("Прочитано %d строк агрегатов.", len(df))
    return [
        MonthlyCategoryTotal(
            month_key=str(row.monthKey),
            category=str(row.category),
            total_amount=float(row.totalAmount),
        )
        for row in df.itertuples(index=False)
    ]


# ---------- CLI оболочка ----------

def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Прогноз расходов и безопасный бюджет.")
    parser.add_argument("--totals", type=str, required=True, help="CSV/JSON с месячными агрегатами.")
    parser.add_argument(
        "--artifact",
        type=str,
        default=None,
        help="Путь к артефакту лаг-модели (по умолчанию FORECAST_ARTIFACT_PATH).",
    )
    parser.add_argument(
        "--savings-rate",
        type=float,
        default=None,
        help="Целевая норма сбережений (по умолчанию 0.2).",
    )
    parser.add_argument(
        "--income-months",
        type=int,
        default=None,
        help="За сколько последних месяцев усреднять доход (по умолчанию 3).",
    )
    parser.add_argument("--alpha", type=float, default=None, help="Вес уровня в методе Холта.")
    parser.add_argument("--beta", type=float, default=None, help="Вес тренда в методе Холта.")
    parser.add_argument("--indent", type=int, default=2, help="Отступ JSON.")
    return parser


def _settings_from_args(args: argparse.Namespace) -> ForecastSettings:
    overrides = {
        "artifact_path": args.artifact,
        "target_savings_rate": args.savings_rate,
        "income_months": args.income_months,
        "holt_alpha": args.alpha,
        "holt_beta": args.beta,
    }
    return ForecastSettings(**{k: v for k, v in overrides.items() if v is not None})


def main(argv: List[str] | None = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    settings = _settings_from_args(args)
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    engine_config = build_engine_config(settings)
    totals = load_monthly_totals(args.totals)
    report = SpendingForecastService(engine_config).report(totals)
    payload = ForecastReportResponse.from_report(report)
    print(payload.model_dump_json(by_alias=True, indent=args.indent))
    return 0


if __name__ == "__main__":
    sys.exit(main())
