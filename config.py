"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# ── Telegram ──────────────────────────────────────────────
TELEGRAM_BOT_TOKEN: str = os.getenv("TELEGRAM_BOT_TOKEN", "")

# ── PostgreSQL ────────────────────────────────────────────
DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
DB_NAME: str = os.getenv("DB_NAME", "budget_alerts")
DB_USER: str = os.getenv("DB_USER", "budget_user")
DB_PASS: str = os.getenv("DB_PASS", "")

DATABASE_URL: str = (
    f"postgresql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
)

# ── Security ──────────────────────────────────────────────
_raw_ids = os.getenv("ALLOWED_USER_IDS", "")
ALLOWED_USER_IDS: list[int] = (
    [int(uid.strip()) for uid in _raw_ids.split(",") if uid.strip()]
    if _raw_ids
    else []
)

# ── Rate Limiting ─────────────────────────────────────────
RATE_LIMIT_MESSAGES: int = int(os.getenv("RATE_LIMIT_MESSAGES", "30"))
RATE_LIMIT_WINDOW_SECONDS: int = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60"))

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# ── Display ───────────────────────────────────────────────
CURRENCY_SYMBOL: str = os.getenv("CURRENCY_SYMBOL", "₹")

# ── Budget defaults (new users) ───────────────────────────
DEFAULT_MONTHLY_BUDGET: float = float(os.getenv("DEFAULT_MONTHLY_BUDGET", "80000"))
DEFAULT_WEEKLY_BUDGET: float = float(os.getenv("DEFAULT_WEEKLY_BUDGET", "20000"))
DEFAULT_DAILY_BUDGET: float = float(os.getenv("DEFAULT_DAILY_BUDGET", "2500"))

# ── Notification defaults (new users) ─────────────────────
DEFAULT_BUDGET_WARNING_PCT: float = float(os.getenv("DEFAULT_BUDGET_WARNING_PCT", "80"))
DEFAULT_LOW_BALANCE: float = float(os.getenv("DEFAULT_LOW_BALANCE", "2500"))
DEFAULT_IRREGULAR_EXPENSE_PCT: float = float(os.getenv("DEFAULT_IRREGULAR_EXPENSE_PCT", "150"))
DEFAULT_NOTIFICATIONS_ENABLED: bool = _env_bool("DEFAULT_NOTIFICATIONS_ENABLED", True)

# ── Scheduled jobs ────────────────────────────────────────
# Hour in the host's local time zone, the same zone the budget windows use.
ALERT_DIGEST_HOUR: int = int(os.getenv("ALERT_DIGEST_HOUR", "9"))
