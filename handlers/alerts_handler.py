"""
handlers/alerts_handler.py
--------------------------
Shows and dismisses active budget alerts.
"""

from telegram import Update
from telegram.ext import ContextTypes

from handlers.common import get_user_store
from services import report_service
from security.auth import authorized_only
from security.rate_limiter import rate_limited
from utils.logger import get_logger

logger = get_logger(__name__)


@authorized_only
@rate_limited
async def alerts_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /alerts - list the active alerts, numbered."""
    store = get_user_store(update)
    await update.message.reply_text(
        report_service.format_alerts(store.active_notifications()), parse_mode="Markdown"
    )


@authorized_only
@rate_limited
async def dismiss_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /dismiss - hide one alert.

    Usage:
        /dismiss 2                  → by its number in /alerts
        /dismiss Low balance alert  → by its exact text

    A dismissed alert comes back after the next change while its
    condition still holds.
    """
    if not context.args:
        await update.message.reply_text("⚠️ Usage: /dismiss <number or alert text>")
        return

    store = get_user_store(update)
    alerts = store.active_notifications()
    target = " ".join(context.args).strip()

    if target.isdigit():
        index = int(target) - 1
        if not 0 <= index < len(alerts):
            await update.message.reply_text(f"⚠️ There is no alert number {target}.")
            return
        target = alerts[index]

    if store.clear_notification(target):
        logger.info(f"User {update.effective_user.id} dismissed '{target}'")
        await update.message.reply_text(f"🔕 Dismissed: {target}")
    else:
        await update.message.reply_text(f"⚠️ \"{target}\" is not an active alert.")
