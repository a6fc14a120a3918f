"""
handlers/start_handler.py
--------------------------
Handles /start, /help and /myid commands.
Registers the user and shows available commands.
"""

from telegram import Update
from telegram.ext import ContextTypes

from handlers.common import get_user_store, with_alerts
from security.auth import authorized_only
from security.rate_limiter import rate_limited
from utils.logger import get_logger

logger = get_logger(__name__)

HELP_TEXT = """
🤖 *Budget alerts bot*
Track income and expenses, set budgets, get warned before you overspend.

*💸 Transactions:*
/add - add income or expense (e.g. `/add expense 250 Food & Dining; Lunch`)
/delete - delete a transaction by id
/history - list, filter and search transactions
/balance - all-time income, expenses and balance

*💰 Budgets:*
/budget - budget status, or `/budget monthly 80000`
/categories - categories with spend vs. limit
/category\\_add - add a category
/category\\_edit - rename or change a limit
/category\\_delete - delete a category

*🔔 Alerts:*
/alerts - show active alerts
/dismiss - hide an alert
/settings - alert thresholds and on/off switch
/reset - delete all data and start over

*📊 Reports:*
/analytics - trends and breakdowns
/export\\_csv - export transactions as CSV
/export\\_excel - export transactions as Excel
/myid - show your Telegram ID
"""


@authorized_only
@rate_limited
async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start command - register user and show welcome message."""
    user = update.effective_user
    store = get_user_store(update)
    logger.info(f"User {user.id} ({user.first_name}) started the bot.")

    reply = (
        f"Hi {user.first_name}! 👋\n"
        f"I keep track of your income and expenses and warn you when a budget runs low.\n\n"
        f"Type /help to see every command."
    )
    await update.message.reply_text(with_alerts(reply, store))


@authorized_only
@rate_limited
async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /help command - show all available commands."""
    await update.message.reply_text(HELP_TEXT, parse_mode="Markdown")


async def myid_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /myid - reply with the caller's Telegram ID.
    Not whitelisted, so new users can find the ID to add to ALLOWED_USER_IDS.
    """
    user = update.effective_user
    await update.message.reply_text(f"🆔 Your Telegram ID: `{user.id}`", parse_mode="Markdown")
