# homepro/notifications/base.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, Sequence


@dataclass(frozen=True)
class SendResult:
    ok: bool
    skipped: bool = False
    provider_id: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def skip(cls, reason: str) -> "SendResult":
        return cls(ok=False, skipped=True, error=reason)


@dataclass(frozen=True)
class EmailMessage:
    subject: str
    html: str
    text: Optional[str] = None


@dataclass(frozen=True)
class PushMessage:
    title: str
    message: str
    url: Optional[str] = None
    icon: Optional[str] = "/favicon.ico"
    data: dict[str, Any] = field(default_factory=dict)


class EmailSender(Protocol):
    def enabled(self) -> bool: ...

    def send(self, to: str, message: EmailMessage) -> SendResult: ...


class PushSender(Protocol):
    def enabled(self) -> bool: ...

    def send(self, player_ids: Sequence[str], message: PushMessage) -> SendResult: ...
