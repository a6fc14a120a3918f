"""
handlers/transaction_handler.py
-------------------------------
Handles adding, deleting and browsing transactions.
"""

import psycopg2
from telegram import Update
from telegram.ext import ContextTypes

from handlers.common import SAVE_FAILED, get_user_store, parse_amount, split_fields, with_alerts
from models.transaction import TRANSACTION_TYPES
from services import report_service
from services.history_service import SORT_KEYS, TYPE_FILTERS, filter_transactions
from security.auth import authorized_only
from security.rate_limiter import rate_limited
from utils.errors import InvalidInputError
from utils.logger import get_logger

logger = get_logger(__name__)

ADD_USAGE = (
    "💸 *Add a transaction*\n\n"
    "*Format:* `/add <income|expense> <amount> <category>; [description]; [YYYY-MM-DD]`\n\n"
    "*Examples:*\n"
    "• `/add expense 250 Food & Dining; Lunch`\n"
    "• `/add income 50000 Salary; October pay; 2026-10-01`"
)


@authorized_only
@rate_limited
async def add_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /add - record an income or expense."""
    args = context.args or []
    if len(args) < 3 or args[0].lower() not in TRANSACTION_TYPES:
        await update.message.reply_text(ADD_USAGE, parse_mode="Markdown")
        return

    tx_type = args[0].lower()
    try:
        amount = parse_amount(args[1])
    except ValueError:
        await update.message.reply_text("⚠️ The amount must be a positive number.")
        return

    fields = split_fields(args[2:])
    category = fields[0]
    description = fields[1] if len(fields) > 1 else ""
    on = fields[2] if len(fields) > 2 and fields[2] else None
    if not category:
        await update.message.reply_text(ADD_USAGE, parse_mode="Markdown")
        return

    store = get_user_store(update)
    try:
        transaction = store.add_transaction(tx_type, amount, category, description, on)
    except InvalidInputError as e:
        await update.message.reply_text(f"⚠️ {e}")
        return
    except psycopg2.Error as e:
        logger.error(f"Failed to persist transaction for user {update.effective_user.id}: {e}")
        await update.message.reply_text(SAVE_FAILED)
        return

    emoji = "💸" if transaction.is_expense() else "💰"
    reply = (
        f"{emoji} Saved {transaction.type}:\n"
        f"  📂 Category: {transaction.category}\n"
        f"  💶 Amount: {report_service.money(transaction.amount)}\n"
        f"  📅 Date: {transaction.date}\n"
    )
    if transaction.description:
        reply += f"  📝 Note: {transaction.description}\n"
    reply += f"  🔖 ID: #{transaction.id}"
    if transaction.is_expense() and store.find_category(category) is None:
        reply += "\n\nℹ️ No budget category has this name, so it won't count towards any limit."

    await update.message.reply_text(with_alerts(reply, store))


@authorized_only
@rate_limited
async def delete_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /delete <id> - delete a transaction.
    Usage: /delete 3f9a12bc
    """
    if not context.args:
        await update.message.reply_text("⚠️ Usage: /delete <transaction id>")
        return

    transaction_id = context.args[0].lstrip("#")
    store = get_user_store(update)
    try:
        deleted = store.delete_transaction(transaction_id)
    except psycopg2.Error as e:
        logger.error(f"Failed to persist deletion for user {update.effective_user.id}: {e}")
        await update.message.reply_text(SAVE_FAILED)
        return

    if deleted:
        reply = f"🗑️ Transaction #{transaction_id} deleted."
    else:
        reply = f"⚠️ Transaction #{transaction_id} was not found."
    await update.message.reply_text(with_alerts(reply, store))


@authorized_only
@rate_limited
async def history_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /history - list transactions.

    Usage:
        /history                     → everything, newest first
        /history expense             → only expenses
        /history income by:amount    → income, largest first
        /history food                → search description/category
    """
    type_filter = "all"
    sort_by = "date"
    words = []
    for token in context.args or []:
        lowered = token.lower()
        if lowered in TYPE_FILTERS and type_filter == "all" and not words:
            type_filter = lowered
        elif lowered.startswith("by:") and lowered[3:] in SORT_KEYS:
            sort_by = lowered[3:]
        else:
            words.append(token)

    store = get_user_store(update)
    results = filter_transactions(store.transactions, " ".join(words), type_filter, sort_by)
    await update.message.reply_text(report_service.format_history(results))


@authorized_only
@rate_limited
async def balance_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /balance - all-time income, expenses and balance."""
    store = get_user_store(update)
    await update.message.reply_text(
        report_service.format_balance(store.derive()), parse_mode="Markdown"
    )
