"""
handlers/settings_handler.py
----------------------------
Handles notification settings.
"""

import psycopg2
from telegram import Update
from telegram.ext import ContextTypes

from handlers.common import SAVE_FAILED, get_user_store, parse_amount, store_manager, with_alerts
from services import report_service
from security.auth import authorized_only
from security.rate_limiter import rate_limited
from utils.logger import get_logger

logger = get_logger(__name__)

USAGE = (
    "⚙️ *Settings*\n\n"
    "• `/settings` → show settings\n"
    "• `/settings on` / `/settings off` → enable or disable alerts\n"
    "• `/settings warning 80` → warn at 80% of a budget\n"
    "• `/settings lowbalance 2500` → alert when balance drops to this\n"
    "• `/settings irregular 150` → irregular expense threshold (%)"
)

# command word -> NotificationSettings field
_NUMERIC_FIELDS = {
    "warning": "budget_warning_pct",
    "lowbalance": "low_balance_abs",
    "irregular": "irregular_expense_pct",
}


@authorized_only
@rate_limited
async def settings_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /settings - show or change notification settings."""
    store = get_user_store(update)
    args = context.args or []

    if not args:
        msg = report_service.format_settings(store.notifications, store.derive())
        await update.message.reply_text(msg, parse_mode="Markdown")
        return

    action = args[0].lower()
    if action in ("on", "off"):
        changes = {"enabled": action == "on"}
    elif action in _NUMERIC_FIELDS and len(args) >= 2:
        try:
            value = parse_amount(args[1])
        except ValueError:
            await update.message.reply_text("⚠️ The value must be a positive number.")
            return
        if action == "warning" and value > 100:
            await update.message.reply_text("⚠️ The warning threshold must be between 0 and 100.")
            return
        changes = {_NUMERIC_FIELDS[action]: value}
    else:
        await update.message.reply_text(USAGE, parse_mode="Markdown")
        return

    try:
        store.set_notifications(**changes)
    except psycopg2.Error as e:
        logger.error(f"Failed to persist settings for user {update.effective_user.id}: {e}")
        await update.message.reply_text(SAVE_FAILED)
        return

    await update.message.reply_text(with_alerts("✅ Settings saved.", store))


@authorized_only
@rate_limited
async def reset_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /reset confirm - delete every transaction, category and setting
    and start again from the defaults.
    """
    args = context.args or []
    if not args or args[0].lower() != "confirm":
        await update.message.reply_text(
            "⚠️ This deletes all your transactions, categories and settings.\n"
            "Send `/reset confirm` to continue.",
            parse_mode="Markdown",
        )
        return

    user = update.effective_user
    try:
        store_manager.reset(user.id, user.first_name)
    except psycopg2.Error as e:
        logger.error(f"Failed to reset state for user {user.id}: {e}")
        await update.message.reply_text("❌ Could not reset your data. Please try again later.")
        return

    logger.info(f"User {user.id} reset their budget data")
    await update.message.reply_text("🧹 All data cleared. Default categories and budgets restored.")
