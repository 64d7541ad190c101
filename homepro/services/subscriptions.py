# homepro/services/subscriptions.py
from __future__ import annotations

from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from ..models import PushSubscription


def first_player_id(db: Session, user_id: int) -> Optional[str]:
    # only the oldest active device is notified
    return db.scalar(
        select(PushSubscription.player_id)
        .where(PushSubscription.user_id == user_id, PushSubscription.is_active.is_(True))
        .order_by(PushSubscription.id)
        .limit(1)
    )


def subscribe(db: Session, *, user_id: int, player_id: str) -> PushSubscription:
    sub = db.scalar(
        select(PushSubscription).where(PushSubscription.user_id == user_id, PushSubscription.player_id == player_id)
    )
    if sub is None:
        sub = PushSubscription(user_id=user_id, player_id=player_id, is_active=True)
        db.add(sub)
    else:
        sub.is_active = True
    db.commit()
    db.refresh(sub)
    return sub


def unsubscribe(db: Session, *, user_id: int, player_id: Optional[str] = None) -> int:
    """Deactivate one device, or every device when player_id is None."""
    stmt = update(PushSubscription).where(PushSubscription.user_id == user_id, PushSubscription.is_active.is_(True))
    if player_id:
        stmt = stmt.where(PushSubscription.player_id == player_id)
    n = db.execute(stmt.values(is_active=False)).rowcount
    db.commit()
    return int(n or 0)


def active_player_ids(db: Session, user_id: int) -> list[str]:
    return list(
        db.scalars(
            select(PushSubscription.player_id)
            .where(PushSubscription.user_id == user_id, PushSubscription.is_active.is_(True))
            .order_by(PushSubscription.id)
        ).all()
    )
