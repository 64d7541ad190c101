# homepro/clients/onesignal.py
from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import httpx

from ..config import settings
from ..notifications.base import PushMessage, SendResult

log = logging.getLogger(__name__)


class OneSignalPushSender:
    """Web push through the OneSignal REST API, addressed by player id."""

    def __init__(
        self,
        *,
        app_id: Optional[str] = None,
        rest_api_key: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> None:
        self.app_id = app_id if app_id is not None else settings.onesignal_app_id
        self.rest_api_key = rest_api_key if rest_api_key is not None else settings.onesignal_rest_api_key
        self.base = (base_url or settings.onesignal_base_url).rstrip("/")

    def enabled(self) -> bool:
        return bool(self.app_id and self.rest_api_key)

    def _payload(self, message: PushMessage) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "app_id": self.app_id,
            "headings": {"en": message.title},
            "contents": {"en": message.message},
        }
        if message.url:
            payload["url"] = message.url
        if message.icon:
            payload["chrome_web_icon"] = message.icon
        if message.data:
            payload["data"] = message.data
        return payload

    def send(self, player_ids: Sequence[str], message: PushMessage) -> SendResult:
        if not self.enabled():
            log.warning("OneSignal not configured, skipping push: %s", message.title)
            return SendResult.skip("onesignal credentials not set")

        ids = [p for p in player_ids if p]
        if not ids:
            return SendResult.skip("no player ids")

        payload = self._payload(message)
        payload["include_player_ids"] = ids

        try:
            with httpx.Client(timeout=20.0) as client:
                r = client.post(
                    f"{self.base}/notifications",
                    json=payload,
                    headers={"Authorization": f"Basic {self.rest_api_key}"},
                )
                r.raise_for_status()
                data = r.json()
        except Exception as e:
            log.error("push send failed: %s", e, extra={"provider": "onesignal"})
            return SendResult(ok=False, error=str(e))

        if isinstance(data, dict) and data.get("errors") and not data.get("id"):
            return SendResult(ok=False, error=str(data["errors"]))
        return SendResult(ok=True, provider_id=(data or {}).get("id"))
