"""
handlers/export_handler.py
---------------------------
Handles analytics and data export commands (CSV, Excel).
"""

from telegram import Update
from telegram.ext import ContextTypes

from handlers.common import get_user_store
from services import report_service
from services.export_service import ExportService
from security.auth import authorized_only
from security.rate_limiter import rate_limited
from utils.logger import get_logger

logger = get_logger(__name__)
export_service = ExportService()


def _parse_period(args: list[str]) -> tuple[int, int] | None:
    """``[year month]`` arguments, or None for the whole history."""
    if len(args) < 2:
        return None
    year, month = int(args[0]), int(args[1])
    if not 1 <= month <= 12:
        raise ValueError(f"invalid month: {month}")
    return year, month


@authorized_only
@rate_limited
async def analytics_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /analytics - monthly trend, category breakdown, daily spend."""
    store = get_user_store(update)
    msg = report_service.format_analytics(store.transactions, store.derive())
    await update.message.reply_text(msg, parse_mode="Markdown")


async def _send_export(update: Update, context: ContextTypes.DEFAULT_TYPE,
                       command: str, extension: str) -> None:
    try:
        period = _parse_period(context.args or [])
    except ValueError:
        await update.message.reply_text(
            f"⚠️ Usage: /{command} [year month]\nExample: /{command} 2026 1"
        )
        return
    year, month = period if period else (None, None)

    await update.message.reply_text("📄 Preparing your file...")

    store = get_user_store(update)
    try:
        if extension == "csv":
            buffer = export_service.export_csv(store.transactions, year, month)
        else:
            buffer = export_service.export_excel(store.transactions, year, month)
        scope = f"{month}/{year}" if period else "all time"
        await update.message.reply_document(
            document=buffer,
            filename=export_service.filename(extension, year, month),
            caption=f"📊 Transactions ({scope})",
        )
    except Exception as e:
        logger.error(f"{extension.upper()} export failed: {e}")
        await update.message.reply_text("❌ Export failed. Please try again.")


@authorized_only
@rate_limited
async def export_csv_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /export_csv command - send the history as CSV.
    Optional: /export_csv 2026 1 (for January 2026).
    """
    await _send_export(update, context, "export_csv", "csv")


@authorized_only
@rate_limited
async def export_excel_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /export_excel command - send the history as Excel.
    Optional: /export_excel 2026 1 (for January 2026).
    """
    await _send_export(update, context, "export_excel", "xlsx")
