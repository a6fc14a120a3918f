"""
handlers/category_handler.py
----------------------------
Handles budget category management commands.
"""

import psycopg2
from telegram import Update
from telegram.ext import ContextTypes

from handlers.common import SAVE_FAILED, get_user_store, parse_amount, split_fields, with_alerts
from services import report_service
from security.auth import authorized_only
from security.rate_limiter import rate_limited
from utils.logger import get_logger

logger = get_logger(__name__)

ADD_USAGE = (
    "🏷️ *Add a category*\n\n"
    "*Format:* `/category_add <name>; <limit>; [color]; [icon]`\n"
    "*Example:* `/category_add Pets; 3000; #F97316; PawPrint`"
)
EDIT_USAGE = (
    "✏️ *Edit a category*\n\n"
    "*Format:* `/category_edit <id> field=value; field=value`\n"
    "Fields: name, limit, color, icon\n"
    "*Example:* `/category_edit 3 limit=9000; name=Movies`"
)


@authorized_only
@rate_limited
async def categories_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /categories - list categories with their spend against limits."""
    store = get_user_store(update)
    await update.message.reply_text(
        report_service.format_categories(store.derive()), parse_mode="Markdown"
    )


@authorized_only
@rate_limited
async def category_add_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /category_add <name>; <limit>; [color]; [icon]."""
    fields = split_fields(context.args or [])
    if len(fields) < 2 or not fields[0]:
        await update.message.reply_text(ADD_USAGE, parse_mode="Markdown")
        return

    name = fields[0]
    try:
        limit = parse_amount(fields[1])
    except ValueError:
        await update.message.reply_text("⚠️ The limit must be a positive number.")
        return

    extras = {}
    if len(fields) > 2 and fields[2]:
        extras["color"] = fields[2]
    if len(fields) > 3 and fields[3]:
        extras["icon"] = fields[3]

    store = get_user_store(update)
    if store.find_category(name) is not None:
        await update.message.reply_text(f"ℹ️ A category named \"{name}\" already exists; adding another one.")

    try:
        category = store.add_category(name, limit, **extras)
    except psycopg2.Error as e:
        logger.error(f"Failed to persist category for user {update.effective_user.id}: {e}")
        await update.message.reply_text(SAVE_FAILED)
        return

    reply = (
        f"✅ Category \"{category.name}\" added (#{category.id}).\n"
        f"  💰 Limit: {report_service.money(category.limit)}"
    )
    await update.message.reply_text(with_alerts(reply, store))


@authorized_only
@rate_limited
async def category_edit_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /category_edit <id> field=value; field=value."""
    args = context.args or []
    if len(args) < 2:
        await update.message.reply_text(EDIT_USAGE, parse_mode="Markdown")
        return

    category_id = args[0].lstrip("#")
    changes = {}
    for part in split_fields(args[1:]):
        if not part:
            continue
        key, sep, value = part.partition("=")
        key = key.strip().lower()
        if not sep or key not in ("name", "limit", "color", "icon"):
            await update.message.reply_text(EDIT_USAGE, parse_mode="Markdown")
            return
        if key == "limit":
            try:
                changes[key] = parse_amount(value)
            except ValueError:
                await update.message.reply_text("⚠️ The limit must be a positive number.")
                return
        else:
            changes[key] = value.strip()

    store = get_user_store(update)
    previous = store.get_category(category_id)
    try:
        updated = store.update_category(category_id, **changes)
    except psycopg2.Error as e:
        logger.error(f"Failed to persist category update for user {update.effective_user.id}: {e}")
        await update.message.reply_text(SAVE_FAILED)
        return

    if updated is None:
        await update.message.reply_text(f"⚠️ Category #{category_id} was not found.")
        return

    reply = f"✏️ Category #{category_id} updated: {updated.name}, limit {report_service.money(updated.limit)}."
    if previous is not None and previous.name != updated.name:
        reply += (
            f"\n\nℹ️ Past transactions labelled \"{previous.name}\" keep that label "
            "and no longer count towards this category."
        )
    await update.message.reply_text(with_alerts(reply, store))


@authorized_only
@rate_limited
async def category_delete_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /category_delete <id>. Transactions are left untouched."""
    if not context.args:
        await update.message.reply_text("⚠️ Usage: /category_delete <category id>")
        return

    category_id = context.args[0].lstrip("#")
    store = get_user_store(update)
    try:
        deleted = store.delete_category(category_id)
    except psycopg2.Error as e:
        logger.error(f"Failed to persist category deletion for user {update.effective_user.id}: {e}")
        await update.message.reply_text(SAVE_FAILED)
        return

    if deleted:
        reply = f"🗑️ Category #{category_id} deleted. Its transactions are kept."
    else:
        reply = f"⚠️ Category #{category_id} was not found."
    await update.message.reply_text(with_alerts(reply, store))
