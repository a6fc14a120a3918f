"""
main.py
-------
Entry point for the budget alerts Telegram bot.

Responsibilities:
    - Initialize the database connection pool and schema.
    - Configure and start the Telegram bot with all handlers.
    - Schedule the daily alert digest.
"""

from datetime import datetime, time as dt_time

from telegram import BotCommand
from telegram.ext import Application, CommandHandler

from config import ALERT_DIGEST_HOUR, ALLOWED_USER_IDS, TELEGRAM_BOT_TOKEN
from db.connection import close_pool, init_pool
from db.init_db import create_tables
from handlers.alerts_handler import alerts_command, dismiss_command
from handlers.budget_handler import budget_command
from handlers.category_handler import (
    categories_command,
    category_add_command,
    category_delete_command,
    category_edit_command,
)
from handlers.common import store_manager, user_repo
from handlers.export_handler import analytics_command, export_csv_command, export_excel_command
from handlers.settings_handler import reset_command, settings_command
from handlers.start_handler import help_command, myid_command, start_command
from handlers.transaction_handler import (
    add_command,
    balance_command,
    delete_command,
    history_command,
)
from services import report_service
from utils.logger import get_logger

logger = get_logger(__name__)


def local_tz():
    """The host's local time zone; JobQueue times without one run in UTC."""
    return datetime.now().astimezone().tzinfo


async def send_alert_digest(context) -> None:
    """
    Scheduled job: re-evaluate every user's alerts for the new day and
    send the ones still active. Runs daily at ALERT_DIGEST_HOUR.
    """
    user_ids = ALLOWED_USER_IDS or user_repo.list_telegram_ids()

    for user_id in user_ids:
        try:
            store = store_manager.get_store(user_id)
            alerts = store.refresh()
            if not alerts:
                continue
            await context.bot.send_message(
                chat_id=user_id,
                text=report_service.format_alerts(alerts),
                parse_mode="Markdown",
            )
            logger.info(f"Sent {len(alerts)} alerts to user {user_id}")
        except Exception as e:
            logger.error(f"Failed to send alert digest to {user_id}: {e}")


async def set_bot_commands(application: Application) -> None:
    """Register bot commands menu in Telegram on startup."""
    commands = [
        BotCommand("start", "🚀 Start the bot"),
        BotCommand("help", "📖 Show help"),
        BotCommand("add", "➕ Add income or expense"),
        BotCommand("delete", "🗑️ Delete a transaction"),
        BotCommand("history", "🧾 Transaction history"),
        BotCommand("balance", "🏦 Balance"),
        BotCommand("budget", "💰 Budget status"),
        BotCommand("categories", "🏷️ Categories"),
        BotCommand("category_add", "➕ Add a category"),
        BotCommand("category_edit", "✏️ Edit a category"),
        BotCommand("category_delete", "❌ Delete a category"),
        BotCommand("alerts", "🔔 Active alerts"),
        BotCommand("dismiss", "🔕 Dismiss an alert"),
        BotCommand("settings", "⚙️ Alert settings"),
        BotCommand("reset", "🧹 Delete all data"),
        BotCommand("analytics", "📊 Analytics"),
        BotCommand("export_csv", "📄 Export CSV"),
        BotCommand("export_excel", "📊 Export Excel"),
        BotCommand("myid", "🆔 Your Telegram ID"),
    ]
    await application.bot.set_my_commands(commands)
    logger.info("Bot commands menu registered successfully.")


def main() -> None:
    """Initialize and run the bot."""

    # ── 1. Database setup ─────────────────────────────────
    logger.info("Initializing database...")
    init_pool()
    create_tables()

    # ── 2. Build the Telegram application ─────────────────
    logger.info("Starting Telegram bot...")
    app = Application.builder().token(TELEGRAM_BOT_TOKEN).post_init(set_bot_commands).build()

    # ── 3. Register command handlers ──────────────────────
    handlers = {
        "start": start_command,
        "help": help_command,
        "myid": myid_command,
        "add": add_command,
        "delete": delete_command,
        "history": history_command,
        "balance": balance_command,
        "budget": budget_command,
        "categories": categories_command,
        "category_add": category_add_command,
        "category_edit": category_edit_command,
        "category_delete": category_delete_command,
        "alerts": alerts_command,
        "dismiss": dismiss_command,
        "settings": settings_command,
        "reset": reset_command,
        "analytics": analytics_command,
        "export_csv": export_csv_command,
        "export_excel": export_excel_command,
    }
    for command, callback in handlers.items():
        app.add_handler(CommandHandler(command, callback))

    # ── 4. Schedule jobs ──────────────────────────────────
    job_queue = app.job_queue
    if job_queue:
        job_queue.run_daily(
            send_alert_digest,
            time=dt_time(hour=ALERT_DIGEST_HOUR, minute=0, tzinfo=local_tz()),
            name="daily_alert_digest",
        )
        logger.info(f"Scheduled daily alert digest ({ALERT_DIGEST_HOUR:02d}:00)")

    # ── 5. Start polling ──────────────────────────────────
    logger.info("Budget alerts bot is running! Press Ctrl+C to stop.")
    app.run_polling(drop_pending_updates=True, allowed_updates=["message"])

    # ── 6. Cleanup on shutdown ────────────────────────────
    close_pool()
    logger.info("Budget alerts bot stopped.")


if __name__ == "__main__":
    main()
