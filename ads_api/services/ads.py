# ads_api/services/ads.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from ..errors import AlreadyPosted, NotFound
from ..models.ad import Ad
from ..repository import AdRepository
from .locks import KeyedLock
from .telegram import TelegramPublisher

logger = logging.getLogger(__name__)


@dataclass
class PublishOutcome:
    ad: Ad
    message_id: Optional[int]

    @property
    def degraded(self) -> bool:
        return self.message_id is None


class AdService:
    """
    Ad lifecycle: Unposted --publish--> Posted. Nothing leaves Posted;
    edit_published is only allowed there.
    """

    def __init__(self, repo: AdRepository, publisher: TelegramPublisher, publish_locks: KeyedLock):
        self.repo = repo
        self.publisher = publisher
        self.publish_locks = publish_locks

    def _load(self, ad_id: int) -> Ad:
        ad = self.repo.get_ad(ad_id)
        if not ad:
            raise NotFound("Ad not found")
        return ad

    # ---- read ----

    def get(self, ad_id: int) -> Ad:
        return self._load(ad_id)

    def list(self, user_id: Optional[int] = None) -> List[Ad]:
        if user_id is None:
            return self.repo.list_ads()
        if not self.repo.get_user(user_id):
            raise NotFound("User not found")
        return self.repo.list_ads_by_ids(self.repo.user_ad_ids(user_id))

    # ---- write ----

    def create(self, data: Dict[str, Any]) -> Ad:
        if not self.repo.get_user(data["user_id"]):
            raise NotFound("User not found")

        ad = self.repo.insert_ad(data)

        # the owner projection is best-effort: the ad row is already committed
        try:
            self.repo.append_user_ad(ad.user_id, ad.id)
        except (SQLAlchemyError, LookupError):
            self.repo.rollback()
            logger.exception("Error updating user %s ads with ad %s", ad.user_id, ad.id)

        logger.info("Ad created: id=%s user_id=%s", ad.id, ad.user_id)
        return ad

    def update(self, ad_id: int, data: Dict[str, Any]) -> Ad:
        ad = self._load(ad_id)
        if data.get("user_id") != ad.user_id and not self.repo.get_user(data["user_id"]):
            raise NotFound("User not found")
        ad = self.repo.overwrite_ad(ad, data)
        logger.info("Ad updated: id=%s", ad.id)
        return ad

    def remove(self, ad_id: int) -> None:
        ad = self._load(ad_id)
        self.repo.delete_ad(ad)
        logger.info("Ad removed: id=%s", ad_id)

    # ---- Telegram ----

    def publish(self, ad_id: int) -> PublishOutcome:
        with self.publish_locks.hold(ad_id):
            ad = self._load(ad_id)
            # re-read: another request may have posted while we waited on the lock
            self.repo.refresh(ad)

            result = self.publisher.publish(ad)

            # a degraded result is still posted: claim it so a retry cannot repost the album
            if not self.repo.mark_posted(ad_id, result.message_id):
                logger.error("Ad %s was claimed by another writer after posting message %s",
                             ad_id, result.message_id)
                raise AlreadyPosted("Ad already posted")

            self.repo.refresh(ad)
            if result.degraded:
                logger.warning("Ad %s posted without message id; caption edits are unavailable", ad_id)
                return PublishOutcome(ad=ad, message_id=None)

            logger.info("Ad %s successfully posted to Telegram channel", ad_id)
            return PublishOutcome(ad=ad, message_id=result.message_id)

    def edit_published(self, ad_id: int) -> Ad:
        ad = self._load(ad_id)
        self.publisher.edit_published(ad)
        return ad
