from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent
RESOURCES_DIR = BASE_DIR / "resources"

SAMPLE_ARTIFACT_PATH = RESOURCES_DIR / "sample_pretrained.json"

INCOME_CATEGORY = "Income"
CANONICAL_CATEGORIES = (
    "Dining",
    "Groceries",
    "Subscriptions",
    "Transport",
    "Uncategorized",
    "Other",
    INCOME_CATEGORY,
)

MONTH_KEY_FORMAT = "%Y-%m-01"  # фиксированная ширина: лексикографический порядок == хронологический

HOLT_ALPHA = 0.6
HOLT_BETA = 0.3

TARGET_SAVINGS_RATE = 0.2
AVG_INCOME_MONTHS = 3
MIN_MONTHS_FOR_MODELS = 2  # меньше двух месяцев -> наивный прогноз

NO_HISTORY_NOTE = "No transaction history available"
