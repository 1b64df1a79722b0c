#!/usr/bin/env python3
"""Utility for timing the forecast report on synthetic monthly histories."""

from __future__ import annotations

import argparse
import logging
import time

import numpy as np

from spend_forecast import SpendingForecastService
from spend_forecast.settings import ForecastSettings, build_engine_config
from spend_forecast.synthetic import generate_monthly_totals

LOGGER = logging.getLogger("benchmark")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Benchmark the spending forecast report on synthetic data."
    )
    parser.add_argument(
        "--months",
        type=int,
        default=120,
        help="Number of months of synthetic history.",
    )
    parser.add_argument(
        "--extra-categories",
        type=int,
        default=0,
        help="Additional non-canonical categories to generate.",
    )
    parser.add_argument(
        "--repeat",
        type=int,
        default=200,
        help="How many times to build the report.",
    )
    parser.add_argument(
        "--artifact",
        type=str,
        default=None,
        help="Optional pretrained lag-model artifact (JSON or joblib).",
    )
    parser.add_argument(
        "--random-state",
        type=int,
        default=42,
        help="Seed for the synthetic data generator.",
    )
    return parser.parse_args()


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    args = parse_args()

    categories = [
        "Dining",
        "Groceries",
        "Subscriptions",
        "Transport",
        "Uncategorized",
        "Other",
        *(f"Extra {i}" for i in range(args.extra_categories)),
    ]
    totals = generate_monthly_totals(
        months=args.months,
        categories=categories,
        random_state=args.random_state,
    )
    LOGGER.info("Generated %d monthly totals (%d months)", len(totals), args.months)

    settings = ForecastSettings(artifact_path=args.artifact) if args.artifact else ForecastSettings()
    service = SpendingForecastService(build_engine_config(settings))

    timings = np.empty(args.repeat, dtype=float)
    report = None
    for i in range(args.repeat):
        started = time.perf_counter()
        report = service.report(totals)
        timings[i] = (time.perf_counter() - started) * 1000.0

    LOGGER.info("Method: %s", report.forecast.method.value if report and report.forecast else "-")
    LOGGER.info(
        "Report time, ms: mean=%.3f p50=%.3f p95=%.3f max=%.3f",
        timings.mean(),
        np.percentile(timings, 50),
        np.percentile(timings, 95),
        timings.max(),
    )


if __name__ == "__main__":
    main()
