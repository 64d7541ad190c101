# homepro/services/warranty_scan.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from ..models import Home, User
from ..notifications.base import EmailSender
from ..notifications.emails import ExpiringWarranty, warranty_expiration_email

log = logging.getLogger(__name__)

WINDOW_DAYS = 90
CRITICAL_DAYS = 7


def days_until(expiry: datetime, now: datetime) -> int:
    """Whole days between now and expiry, truncated toward zero."""
    return int((expiry - now).total_seconds() / 86400)


def _label(kind: str, detail: Optional[str]) -> str:
    return f"{kind} ({detail})" if detail else kind


def expiring_for_home(home: Home, now: datetime, *, window_days: int = WINDOW_DAYS) -> list[ExpiringWarranty]:
    where = f"{home.address}, {home.city}"
    candidates: list[tuple[int, str, str, Optional[datetime]]] = []
    for a in home.appliances:
        candidates.append((a.id, _label(a.appliance_type, a.brand), "appliance", a.warranty_expiry))
    for f in home.exterior_features:
        candidates.append((f.id, _label(f.feature_type, f.material), "exterior feature", f.warranty_expiry))
    for f in home.interior_features:
        candidates.append((f.id, _label(f.feature_type, f.material), "interior feature", f.warranty_expiry))

    out: list[ExpiringWarranty] = []
    for item_id, name, kind, expiry in candidates:
        if expiry is None:
            continue
        d = days_until(expiry, now)
        if 0 <= d <= window_days:
            out.append(ExpiringWarranty(item_id=item_id, name=name, type=kind, expiry_date=expiry, days_until_expiry=d, home=where))
    return out


def expiring_for_homes(homes: Iterable[Home], now: datetime) -> list[ExpiringWarranty]:
    out: list[ExpiringWarranty] = []
    for h in homes:
        out.extend(expiring_for_home(h, now))
    out.sort(key=lambda w: w.days_until_expiry)
    return out


@dataclass
class WarrantyScanResult:
    details: list[dict] = field(default_factory=list)

    @property
    def notifications_sent(self) -> int:
        return len(self.details)

    def to_dict(self) -> dict:
        n = self.notifications_sent
        return {
            "success": True,
            "notificationsSent": n,
            "details": self.details,
            "message": f"Sent {n} warranty expiration notification(s)",
        }


def _homes_query():
    return select(Home).options(
        selectinload(Home.appliances),
        selectinload(Home.exterior_features),
        selectinload(Home.interior_features),
    )


def check_expiring_warranties(db: Session, *, email: EmailSender, now: Optional[datetime] = None) -> WarrantyScanResult:
    """
    One summary email per user with warranties expiring in [0, 90] days.

    Items within 7 days are counted as critical; push delivery for them is
    not wired because warranties have no per-device address yet.
    """
    now = now or datetime.utcnow()
    result = WarrantyScanResult()

    for user in db.scalars(select(User).order_by(User.id)).all():
        homes = db.scalars(_homes_query().where(Home.user_id == user.id)).all()
        expiring = expiring_for_homes(homes, now)
        if not expiring:
            continue

        critical = sum(1 for w in expiring if w.days_until_expiry <= CRITICAL_DAYS)
        try:
            sent = email.send(user.email, warranty_expiration_email(expiring))
        except Exception:
            log.exception("warranty email failed", extra={"user_id": user.id})
            continue

        if sent.ok:
            result.details.append(
                {"userId": user.id, "email": user.email, "count": len(expiring), "criticalCount": critical}
            )
    return result


def expiring_for_user(db: Session, *, user_id: int, now: Optional[datetime] = None) -> list[ExpiringWarranty]:
    now = now or datetime.utcnow()
    homes = db.scalars(_homes_query().where(Home.user_id == user_id)).all()
    return expiring_for_homes(homes, now)
