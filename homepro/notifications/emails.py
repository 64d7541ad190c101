# homepro/notifications/emails.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from html import escape
from typing import Optional, Sequence

from ..config import settings
from .base import EmailMessage

_BRAND = "Home Maintenance Pro"

_PRIORITY_BADGES = {
    "critical": "🔴 Critical",
    "high": "🟠 High",
    "medium": "🟡 Medium",
}


def _plural(n: int, word: str) -> str:
    return f"{n} {word}{'s' if n != 1 else ''}"


def _money(v: float) -> str:
    return f"${v:,.2f}"


def _long_date(d: datetime) -> str:
    return f"{d:%A, %B} {d.day}, {d.year}"


def _short_date(d: datetime) -> str:
    return f"{d.month}/{d.day}/{d.year}"


def _page(title: str, body: str) -> str:
    return (
        "<!DOCTYPE html><html><head><meta charset=\"utf-8\">"
        "<meta name=\"viewport\" content=\"width=device-width, initial-scale=1.0\">"
        f"<title>{escape(title)}</title></head>"
        "<body style=\"font-family: Arial, sans-serif; line-height: 1.6; color: #333; "
        "max-width: 600px; margin: 0 auto; padding: 20px;\">"
        "<div style=\"background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); padding: 30px; "
        "text-align: center; border-radius: 10px 10px 0 0;\">"
        f"<h1 style=\"color: white; margin: 0;\">{_BRAND}</h1></div>"
        f"<div style=\"background: #f9f9f9; padding: 30px; border-radius: 0 0 10px 10px;\">{body}</div>"
        "</body></html>"
    )


def _button(path: str, label: str) -> str:
    return (
        "<div style=\"text-align: center; margin: 30px 0;\">"
        f"<a href=\"{settings.app_url}{path}\" style=\"background: #667eea; color: white; padding: 12px 30px; "
        f"text-decoration: none; border-radius: 5px; display: inline-block;\">{label}</a></div>"
    )


# -------------------- Task reminders --------------------

@dataclass(frozen=True)
class TaskReminderData:
    task_name: str
    task_description: str
    due_date: datetime
    home_address: str
    category: str
    days_until_due: int
    priority: Optional[str] = None


def task_reminder_email(data: TaskReminderData) -> EmailMessage:
    subject = f"Reminder: {data.task_name} due in {_plural(data.days_until_due, 'day')}"
    color = "#dc2626" if data.days_until_due <= 7 else "#ea580c" if data.days_until_due <= 14 else "#333"
    badge = _PRIORITY_BADGES.get(data.priority or "", "🟢 Low")

    rows = [
        f"<p><strong>Due Date:</strong> {_long_date(data.due_date)}</p>",
        f"<p><strong>Days Until Due:</strong> <span style=\"color: {color}\">{data.days_until_due}</span></p>",
        f"<p><strong>Category:</strong> {escape(data.category)}</p>",
    ]
    if data.priority:
        rows.append(f"<p><strong>Priority:</strong> {badge}</p>")
    rows.append(f"<p><strong>Home:</strong> {escape(data.home_address)}</p>")

    body = (
        "<h2 style=\"margin-top: 0;\">Maintenance Task Reminder</h2>"
        "<div style=\"background: white; padding: 20px; border-radius: 8px; margin: 20px 0; "
        "border-left: 4px solid #667eea;\">"
        f"<h3 style=\"margin-top: 0; color: #667eea;\">{escape(data.task_name)}</h3>"
        f"<p>{escape(data.task_description)}</p>"
        + "".join(rows)
        + "</div>"
        + _button("/tasks", "View Task")
        + "<p style=\"color: #666; font-size: 14px;\">This is an automated reminder from Home Maintenance Pro. "
        "You're receiving this because you have tasks due soon.</p>"
    )

    text_lines = [
        f"{_BRAND} - Task Reminder",
        "",
        f"Task: {data.task_name}",
        f"Description: {data.task_description}",
        f"Due Date: {_short_date(data.due_date)}",
        f"Days Until Due: {data.days_until_due}",
        f"Category: {data.category}",
    ]
    if data.priority:
        text_lines.append(f"Priority: {data.priority}")
    text_lines += [f"Home: {data.home_address}", "", f"View your tasks: {settings.app_url}/tasks"]

    return EmailMessage(subject=subject, html=_page(subject, body), text="\n".join(text_lines))


def _task_group(title: str, color: str, tasks: Sequence[TaskReminderData]) -> str:
    if not tasks:
        return ""
    items = "".join(
        "<div style=\"background: white; padding: 15px; border-radius: 8px; margin: 10px 0; "
        f"border-left: 4px solid {color};\"><strong>{escape(t.task_name)}</strong><br>"
        f"Due: {_short_date(t.due_date)} ({t.days_until_due} days)</div>"
        for t in tasks
    )
    return f"<div style=\"margin: 20px 0;\"><h3>{title} ({len(tasks)})</h3>{items}</div>"


def bulk_task_reminder_email(tasks: Sequence[TaskReminderData]) -> EmailMessage:
    subject = f"You have {_plural(len(tasks), 'maintenance task')} due soon"
    critical = [t for t in tasks if t.priority == "critical"]
    high = [t for t in tasks if t.priority == "high"]
    other = [t for t in tasks if t.priority not in ("critical", "high")]

    body = (
        f"<h2 style=\"margin-top: 0;\">You have {_plural(len(tasks), 'task')} due soon</h2>"
        + _task_group("🔴 Critical Priority", "#dc2626", critical)
        + _task_group("🟠 High Priority", "#ea580c", high)
        + _task_group("Other Tasks", "#667eea", other)
        + _button("/tasks", "View All Tasks")
    )
    text = "\n".join(
        [f"{_BRAND} - {subject}", ""]
        + [f"- {t.task_name}: due {_short_date(t.due_date)} ({t.days_until_due} days)" for t in tasks]
        + ["", f"View your tasks: {settings.app_url}/tasks"]
    )
    return EmailMessage(subject=subject, html=_page(subject, body), text=text)


# -------------------- Budget alerts --------------------

@dataclass(frozen=True)
class BudgetAlertData:
    plan_name: str
    amount: float
    spent: float
    remaining: float
    percent_used: float
    alert_type: str  # APPROACHING_LIMIT|EXCEEDED_LIMIT


def budget_alert_email(data: BudgetAlertData) -> EmailMessage:
    exceeded = data.alert_type == "EXCEEDED_LIMIT"
    subject = f"🚨 Budget Exceeded: {data.plan_name}" if exceeded else f"⚠️ Budget Alert: {data.plan_name}"
    accent = "#dc2626" if exceeded else "#f59e0b"

    if exceeded:
        note = (
            f"Your budget has been exceeded by {_money(data.spent - data.amount)}. "
            "Consider reviewing your spending and adjusting your budget if needed."
        )
    else:
        note = f"You're approaching your budget limit. Only {_money(data.remaining)} remaining."

    body = (
        f"<h2 style=\"margin-top: 0; color: {accent};\">{escape(subject)}</h2>"
        f"<h3>{escape(data.plan_name)}</h3>"
        f"<p><strong>Budget Amount:</strong> {_money(data.amount)}</p>"
        f"<p><strong>Amount Spent:</strong> <span style=\"color: {accent};\">{_money(data.spent)}</span></p>"
        f"<p><strong>Remaining:</strong> {_money(data.remaining)}</p>"
        f"<p><strong>Percent Used:</strong> {data.percent_used:.1f}%</p>"
        f"<p style=\"color: {accent}; font-weight: bold;\">{note}</p>"
        + _button("/budget", "View Budget Dashboard")
    )
    text = "\n".join([
        subject,
        "",
        f"Budget Amount: {_money(data.amount)}",
        f"Amount Spent: {_money(data.spent)}",
        f"Remaining: {_money(data.remaining)}",
        f"Percent Used: {data.percent_used:.1f}%",
        "",
        note,
        "",
        f"View your budget: {settings.app_url}/budget",
    ])
    return EmailMessage(subject=subject, html=_page(subject, body), text=text)


# -------------------- Warranties --------------------

@dataclass(frozen=True)
class ExpiringWarranty:
    item_id: int
    name: str
    type: str  # appliance|exterior|interior
    expiry_date: datetime
    days_until_expiry: int
    home: str

    def to_dict(self) -> dict:
        return {
            "id": self.item_id,
            "name": self.name,
            "type": self.type,
            "expiryDate": self.expiry_date,
            "daysUntilExpiry": self.days_until_expiry,
            "home": self.home,
        }


def group_warranties(
    warranties: Sequence[ExpiringWarranty],
) -> tuple[list[ExpiringWarranty], list[ExpiringWarranty], list[ExpiringWarranty]]:
    """(critical <= 7 days, urgent 8..30, upcoming 31..90)"""
    critical = [w for w in warranties if w.days_until_expiry <= 7]
    urgent = [w for w in warranties if 7 < w.days_until_expiry <= 30]
    upcoming = [w for w in warranties if 30 < w.days_until_expiry <= 90]
    return critical, urgent, upcoming


def _warranty_group(title: str, bg: str, color: str, items: Sequence[ExpiringWarranty]) -> str:
    if not items:
        return ""
    lis = "".join(
        f"<li style=\"margin: 8px 0;\"><strong>{escape(w.name)}</strong> ({escape(w.type)})<br>"
        f"<span style=\"color: #666; font-size: 14px;\">Expires: {_short_date(w.expiry_date)} "
        f"({_plural(w.days_until_expiry, 'day')})</span><br>"
        f"<span style=\"color: #666; font-size: 14px;\">📍 {escape(w.home)}</span></li>"
        for w in items
    )
    return (
        f"<div style=\"background: {bg}; border-left: 4px solid {color}; padding: 15px; margin: 20px 0; "
        f"border-radius: 5px;\"><h2 style=\"color: {color}; margin-top: 0; font-size: 18px;\">{title}</h2>"
        f"<ul style=\"margin: 10px 0; padding-left: 20px;\">{lis}</ul></div>"
    )


def _warranty_text(label: str, items: Sequence[ExpiringWarranty]) -> list[str]:
    if not items:
        return []
    lines = [f"{label}:"]
    lines += [
        f"- {w.name} ({w.type}) - Expires: {_short_date(w.expiry_date)} ({w.days_until_expiry} days) - {w.home}"
        for w in items
    ]
    return lines + [""]


def warranty_expiration_email(warranties: Sequence[ExpiringWarranty]) -> EmailMessage:
    if len(warranties) == 1:
        subject = f"⚠️ Warranty Expiring: {warranties[0].name}"
    else:
        subject = f"⚠️ {len(warranties)} Warranties Expiring Soon"

    critical, urgent, upcoming = group_warranties(warranties)
    body = (
        "<p>Hello,</p>"
        f"<p>You have <strong>{len(warranties)} warranty(ies)</strong> expiring in the next 90 days. "
        "Review them below and take action before they expire.</p>"
        + _warranty_group("🔴 Critical: Expiring in 7 Days or Less", "#fee2e2", "#dc2626", critical)
        + _warranty_group("🟡 Urgent: Expiring in 30 Days", "#fef3c7", "#d97706", urgent)
        + _warranty_group("🔵 Upcoming: Expiring in 90 Days", "#dbeafe", "#2563eb", upcoming)
        + "<h3 style=\"font-size: 16px;\">Recommended Actions:</h3><ul style=\"color: #666;\">"
        "<li>Review warranty terms and coverage</li><li>File any pending warranty claims</li>"
        "<li>Schedule inspections or repairs if needed</li><li>Consider extended warranty options</li></ul>"
        + _button("/warranties", "View All Warranties")
    )

    text = "\n".join(
        ["Warranty Expiration Alert", "", f"You have {len(warranties)} warranty(ies) expiring in the next 90 days.", ""]
        + _warranty_text("CRITICAL - Expiring in 7 days or less", critical)
        + _warranty_text("URGENT - Expiring in 30 days", urgent)
        + _warranty_text("UPCOMING - Expiring in 90 days", upcoming)
        + [f"View all warranties: {settings.app_url}/warranties"]
    )
    return EmailMessage(subject=subject, html=_page("Warranty Expiration Alert", body), text=text)
