"""
services/report_service.py
--------------------------
Renders budget state as chat-ready text.
Every function here is pure: it receives derived data and returns a string.
"""

from typing import Iterable, Optional

from telegram.helpers import escape_markdown

from config import CURRENCY_SYMBOL, DEFAULT_BUDGET_WARNING_PCT
from models.budget import BudgetCategory, BudgetSnapshot, CurrentSpending, NotificationSettings
from models.transaction import Transaction
from services import analytics_service


def money(amount: float) -> str:
    return f"{CURRENCY_SYMBOL}{amount:,.2f}"


def md(text: str) -> str:
    """Escape user-supplied text for replies sent with parse_mode='Markdown'."""
    return escape_markdown(text, version=1)


def progress_bar(pct: Optional[float], warning_pct: float = DEFAULT_BUDGET_WARNING_PCT,
                 length: int = 15) -> str:
    """Generate a text progress bar, flagged once usage reaches warning_pct."""
    if pct is None:
        return "░" * length + " (no limit)"
    filled = int(min(max(pct, 0), 100) / 100 * length)
    empty = length - filled
    if pct >= 100:
        return "█" * length + " ⚠️"
    elif pct >= warning_pct:
        return "█" * filled + "░" * empty + " ⚡"
    else:
        return "█" * filled + "░" * empty


def status_icon(pct: Optional[float], warning_pct: float) -> str:
    if pct is None:
        return "⚪"
    if pct >= 100:
        return "🔴"
    if pct >= warning_pct:
        return "🟡"
    return "🟢"


def format_transaction(t: Transaction) -> str:
    sign = "🔴" if t.is_expense() else "🟢"
    desc = f" - {t.description}" if t.description else ""
    return f"{sign} #{t.id} | {t.date} | {t.category} | {money(t.amount)}{desc}"


def format_category(c: BudgetCategory, warning_pct: float) -> str:
    pct = c.usage_pct
    pct_text = f"{pct:.0f}%" if pct is not None else "-"
    remaining = max(0.0, c.limit - c.spent)
    return (
        f"{status_icon(pct, warning_pct)} *{md(c.name)}* `#{c.id}`: "
        f"{money(c.spent)} / {money(c.limit)} ({pct_text})\n"
        f"  {progress_bar(pct, warning_pct)}\n"
        f"  Remaining: {money(remaining)}"
    )


def format_alerts(alerts: list[str]) -> str:
    if not alerts:
        return "✅ No active alerts."
    lines = ["🔔 *Active alerts*\n"]
    for index, alert in enumerate(alerts, start=1):
        lines.append(f"{index}. {md(alert)}")
    lines.append("\nUse /dismiss <number> to hide one.")
    return "\n".join(lines)


def format_balance(snapshot: BudgetSnapshot) -> str:
    icon = "📈" if snapshot.balance >= 0 else "📉"
    return (
        "🏦 *Balance*\n\n"
        f"💰 Total income: {money(snapshot.total_income)}\n"
        f"💸 Total expenses: {money(snapshot.total_expenses)}\n"
        f"{icon} *Balance: {money(snapshot.balance)}*"
    )


def format_budget_status(snapshot: BudgetSnapshot, spending: CurrentSpending) -> str:
    """Window budgets, dashboard figures and per-category progress."""
    warning = snapshot.notifications.budget_warning_pct
    summary = analytics_service.dashboard_summary(snapshot)

    lines = ["💰 *Budget status*\n"]
    windows = (
        ("Monthly", spending.monthly, snapshot.monthly_budget),
        ("Weekly", spending.weekly, snapshot.weekly_budget),
        ("Daily", spending.daily, snapshot.daily_budget),
    )
    for label, spent, budget in windows:
        pct = spent / budget * 100 if budget > 0 else None
        pct_text = f"{pct:.0f}%" if pct is not None else "no budget"
        lines.append(
            f"{status_icon(pct, warning)} {label}: {money(spent)} / {money(budget)} ({pct_text})\n"
            f"  {progress_bar(pct, warning)}"
        )

    lines.append("")
    lines.append(f"📂 Categories used: {summary['active_categories']} of {summary['total_categories']}")
    lines.append(f"🏆 Highest spending: {md(summary['highest_spending'] or 'None')}")
    lines.append(f"📊 Average per category: {money(summary['average_per_category'])}")

    if snapshot.categories:
        lines.append("")
        lines.extend(format_category(c, warning) for c in snapshot.categories)
    return "\n".join(lines)


def format_categories(snapshot: BudgetSnapshot) -> str:
    if not snapshot.categories:
        return "📭 No categories yet. Add one with /category_add."
    warning = snapshot.notifications.budget_warning_pct
    body = "\n\n".join(format_category(c, warning) for c in snapshot.categories)
    return f"🏷️ *Categories*\n\n{body}"


def format_history(transactions: Iterable[Transaction], limit: int = 20) -> str:
    transactions = list(transactions)
    if not transactions:
        return "📭 No matching transactions."
    shown = transactions[:limit]
    lines = [f"🧾 *Transactions* ({len(transactions)} found)\n"]
    lines.extend(format_transaction(t) for t in shown)
    if len(transactions) > limit:
        lines.append(f"\n… and {len(transactions) - limit} more.")
    return "\n".join(lines)


def format_settings(settings: NotificationSettings, snapshot: BudgetSnapshot) -> str:
    state = "on" if settings.enabled else "off"
    return (
        "⚙️ *Settings*\n\n"
        f"🔔 Notifications: {state}\n"
        f"⚠️ Budget warning at: {settings.budget_warning_pct:.0f}%\n"
        f"🏦 Low balance below: {money(settings.low_balance_abs)}\n"
        f"📈 Irregular expense: {settings.irregular_expense_pct:.0f}%\n\n"
        f"📅 Monthly budget: {money(snapshot.monthly_budget)}\n"
        f"📆 Weekly budget: {money(snapshot.weekly_budget)}\n"
        f"🗓️ Daily budget: {money(snapshot.daily_budget)}"
    )


def format_analytics(transactions: Iterable[Transaction], snapshot: BudgetSnapshot) -> str:
    transactions = tuple(transactions)
    if not transactions:
        return "📭 No transactions to analyse yet."

    lines = ["📊 *Analytics*\n", "*Monthly trend:*"]
    for row in analytics_service.monthly_trends(transactions):
        net = row["income"] - row["expense"]
        lines.append(
            f"  {row['month']}: +{money(row['income'])} / -{money(row['expense'])} (net {money(net)})"
        )

    breakdown = analytics_service.category_breakdown(snapshot)
    if breakdown:
        lines.append("\n*Where the money goes:*")
        for row in breakdown:
            lines.append(f"  • {md(row['name'])}: {money(row['value'])} ({row['percentage']:.1f}%)")

    limits = [row for row in analytics_service.budget_vs_spent(snapshot) if row["budget"] > 0]
    if limits:
        lines.append("\n*Budget vs spent:*")
        for row in limits:
            lines.append(
                f"  {md(row['category'])}: {money(row['spent'])} of {money(row['budget'])}, "
                f"{money(row['remaining'])} left ({row['usage_pct']:.0f}%)"
            )

    daily = analytics_service.daily_spending(transactions)
    if daily:
        lines.append("\n*Recent daily spending:*")
        for row in daily:
            lines.append(f"  {row['date']}: {money(row['amount'])}")

    return "\n".join(lines)
