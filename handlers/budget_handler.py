"""
handlers/budget_handler.py
---------------------------
Handles the monthly / weekly / daily budget commands.
"""

import psycopg2
from telegram import Update
from telegram.ext import ContextTypes

from handlers.common import SAVE_FAILED, get_user_store, parse_amount, with_alerts
from services import report_service
from security.auth import authorized_only
from security.rate_limiter import rate_limited
from utils.logger import get_logger

logger = get_logger(__name__)

USAGE = (
    "⚠️ Unknown command.\n"
    "Use:\n"
    "• `/budget` → budget status\n"
    "• `/budget monthly <amount>`\n"
    "• `/budget weekly <amount>`\n"
    "• `/budget daily <amount>`"
)


@authorized_only
@rate_limited
async def budget_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /budget command - show or change the period budgets.

    Usage:
        /budget                  → show budget status
        /budget monthly 80000    → set the monthly budget
        /budget weekly 20000     → set the weekly budget
        /budget daily 2500       → set the daily budget (0 disables its alert)
    """
    store = get_user_store(update)

    if not context.args:
        msg = report_service.format_budget_status(store.derive(), store.current_spending())
        await update.message.reply_text(msg, parse_mode="Markdown")
        return

    period = context.args[0].lower()
    setters = {
        "monthly": store.set_monthly_budget,
        "weekly": store.set_weekly_budget,
        "daily": store.set_daily_budget,
    }
    if period not in setters or len(context.args) < 2:
        await update.message.reply_text(USAGE, parse_mode="Markdown")
        return

    try:
        amount = parse_amount(context.args[1])
    except ValueError:
        await update.message.reply_text("⚠️ The amount must be a positive number.")
        return

    try:
        setters[period](amount)
    except psycopg2.Error as e:
        logger.error(f"Failed to persist {period} budget for user {update.effective_user.id}: {e}")
        await update.message.reply_text(SAVE_FAILED)
        return

    reply = f"✅ {period.capitalize()} budget set to {report_service.money(amount)}."
    await update.message.reply_text(with_alerts(reply, store))
