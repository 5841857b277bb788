# ads_api/services/telegram.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from ..config import Settings
from ..errors import (
    AlreadyPosted, ConfigurationMissing, EditFailed, NotEditable, PublishFailed, ValidationError,
)
from ..models.ad import Ad
from .captions import format_caption

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PublishResult:
    message_id: Optional[int]

    @property
    def degraded(self) -> bool:
        # posted, but nothing to address a later edit to
        return self.message_id is None


def build_media_group(photos: List[str], caption: str) -> List[Dict[str, str]]:
    """Only the first item of a media group may carry a caption."""
    media = []
    for i, ref in enumerate(photos):
        item = {"type": "photo", "media": ref}
        if i == 0:
            item["caption"] = caption
            item["parse_mode"] = "HTML"
        media.append(item)
    return media


class TelegramPublisher:
    """Posts ads to the channel through the Bot API and edits their captions."""

    def __init__(self, settings: Settings, client: httpx.Client | None = None):
        self.settings = settings
        self._client = client

    # ---- helpers ----

    def _credentials(self) -> tuple[str, str]:
        token = self.settings.TELEGRAM_BOT_TOKEN
        channel = self.settings.TELEGRAM_CHANNEL_ID
        if not token or not channel:
            raise ConfigurationMissing("TELEGRAM_BOT_TOKEN or TELEGRAM_CHANNEL_ID not set")
        return token, channel

    def _post(self, token: str, method: str, payload: Dict[str, Any]) -> httpx.Response:
        url = f"{self.settings.TELEGRAM_API_URL.rstrip('/')}/bot{token}/{method}"
        if self._client is not None:
            return self._client.post(url, json=payload, timeout=self.settings.TELEGRAM_TIMEOUT_SEC)
        with httpx.Client(timeout=self.settings.TELEGRAM_TIMEOUT_SEC) as c:
            return c.post(url, json=payload)

    # ---- publish ----

    def publish(self, ad: Ad) -> PublishResult:
        if ad.is_posted:
            raise AlreadyPosted("Ad already posted")
        token, channel = self._credentials()

        photos = ad.photo_list
        if not photos:
            raise ValidationError("Ad has no photos")

        caption = format_caption(ad)
        payload = {"chat_id": channel, "media": build_media_group(photos, caption.text)}

        try:
            resp = self._post(token, "sendMediaGroup", payload)
        except httpx.HTTPError as e:
            logger.error("sendMediaGroup failed for ad %s: %s", ad.id, type(e).__name__)
            raise PublishFailed(f"error making request: {type(e).__name__}", body=str(e)) from e

        if resp.status_code != 200:
            logger.error("sendMediaGroup for ad %s returned %s: %s", ad.id, resp.status_code, resp.text)
            raise PublishFailed(
                f"unexpected status code: {resp.status_code}",
                status=resp.status_code,
                body=resp.text,
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise PublishFailed("error decoding response", status=resp.status_code, body=resp.text) from e

        result = data.get("result") if isinstance(data, dict) else None
        message_id = None
        if isinstance(result, list) and result:
            first = result[0]
            if not isinstance(first, dict):
                raise PublishFailed("unexpected message descriptor", status=resp.status_code, body=resp.text)
            message_id = first.get("message_id")
            if message_id is not None and (isinstance(message_id, bool) or not isinstance(message_id, int)):
                raise PublishFailed("unexpected message_id", status=resp.status_code, body=resp.text)

        if message_id is None:
            logger.warning("sendMediaGroup for ad %s returned no messages; post is not editable", ad.id)
        else:
            logger.info("ad %s posted as message %s (%d photos)", ad.id, message_id, len(photos))
        return PublishResult(message_id=message_id)

    # ---- edit ----

    def edit_published(self, ad: Ad) -> None:
        if not ad.is_posted or ad.chat_message_id is None:
            raise NotEditable("Ad is not posted or has no chat message id")
        token, channel = self._credentials()

        caption = format_caption(ad)
        payload = {
            "chat_id": channel,
            "message_id": ad.chat_message_id,
            "caption": caption.text,
            "parse_mode": "HTML",
        }

        try:
            resp = self._post(token, "editMessageCaption", payload)
        except httpx.HTTPError as e:
            logger.error("editMessageCaption failed for ad %s: %s", ad.id, type(e).__name__)
            raise EditFailed(f"error making request: {type(e).__name__}", description=str(e)) from e

        try:
            data = resp.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if resp.status_code != 200 or not data.get("ok", False):
            description = data.get("description") or resp.text
            error_code = data.get("error_code") or resp.status_code
            logger.error("editMessageCaption for ad %s failed: %s %s", ad.id, error_code, description)
            raise EditFailed(
                f"Telegram API error: {description}",
                error_code=error_code,
                description=description,
            )

        logger.info("caption of ad %s (message %s) updated", ad.id, ad.chat_message_id)
