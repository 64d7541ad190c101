# homepro/clients/resend.py
from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from ..config import settings
from ..notifications.base import EmailMessage, SendResult

log = logging.getLogger(__name__)


class ResendEmailSender:
    """Transactional email over the Resend REST API."""

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        from_email: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.resend_api_key
        self.from_email = from_email or settings.resend_from_email
        self.base = (base_url or settings.resend_base_url).rstrip("/")

    def enabled(self) -> bool:
        return bool(self.api_key)

    def send(self, to: str, message: EmailMessage) -> SendResult:
        if not self.api_key:
            log.warning("resend_api_key not configured, skipping email: %s", message.subject)
            return SendResult.skip("resend_api_key not set")

        payload: dict[str, Any] = {
            "from": self.from_email,
            "to": [to],
            "subject": message.subject,
            "html": message.html,
        }
        if message.text:
            payload["text"] = message.text

        try:
            with httpx.Client(timeout=20.0) as client:
                r = client.post(
                    f"{self.base}/emails",
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
                r.raise_for_status()
                data = r.json()
        except Exception as e:
            log.error("email send failed: %s", e, extra={"provider": "resend"})
            return SendResult(ok=False, error=str(e))

        return SendResult(ok=True, provider_id=(data or {}).get("id"))
