# ads_api/repository.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from .models.ad import Ad
from .models.user import User, UserAd

# fields a client may overwrite on an ad; identity, created_at and posting state are not here
AD_MUTABLE_FIELDS = (
    "user_id", "username", "photos", "rooms", "price",
    "type", "area", "building", "district", "text",
)


class AdRepository:
    """Ads, users and the per-user owned-ad projection over one Session."""

    def __init__(self, db: Session):
        self.db = db

    # ---- ads ----

    def get_ad(self, ad_id: int) -> Optional[Ad]:
        return self.db.get(Ad, ad_id)

    def list_ads(self) -> List[Ad]:
        return self.db.execute(select(Ad).order_by(Ad.id.asc())).scalars().all()

    def list_ads_by_ids(self, ad_ids: List[int]) -> List[Ad]:
        if not ad_ids:
            return []
        rows = self.db.execute(select(Ad).where(Ad.id.in_(ad_ids))).scalars().all()
        by_id = {a.id: a for a in rows}
        # keep projection order, skip ids that no longer exist
        return [by_id[i] for i in ad_ids if i in by_id]

    def insert_ad(self, fields: Dict[str, Any]) -> Ad:
        ad = Ad(**{k: fields[k] for k in AD_MUTABLE_FIELDS if k in fields})
        ad.is_posted = False
        ad.chat_message_id = None
        self.db.add(ad)
        self.db.commit()
        self.db.refresh(ad)
        return ad

    def overwrite_ad(self, ad: Ad, fields: Dict[str, Any]) -> Ad:
        for k in AD_MUTABLE_FIELDS:
            setattr(ad, k, fields.get(k))
        self.db.add(ad)
        self.db.commit()
        self.db.refresh(ad)
        return ad

    def mark_posted(self, ad_id: int, chat_message_id: Optional[int]) -> bool:
        """
        Claim the Unposted -> Posted transition.
        chat_message_id is None when Telegram returned no message for the post.
        Returns False if the ad was already posted by someone else.
        """
        res = self.db.execute(
            update(Ad)
            .where(Ad.id == ad_id, Ad.is_posted.is_(False))
            .values(is_posted=True, chat_message_id=chat_message_id)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return res.rowcount == 1

    def delete_ad(self, ad: Ad) -> None:
        self.db.execute(delete(UserAd).where(UserAd.ad_id == ad.id))
        self.db.delete(ad)
        self.db.commit()
        # owners still hold the removed links in their loaded collections
        self.db.expire_all()

    def refresh(self, obj) -> None:
        self.db.refresh(obj)

    # ---- users ----

    def get_user(self, userid: int) -> Optional[User]:
        return self.db.get(User, userid)

    def list_users(self) -> List[User]:
        return self.db.execute(select(User).order_by(User.userid.asc())).scalars().all()

    def insert_user(self, userid: Optional[int], username: Optional[str], ad_ids: List[int]) -> User:
        u = User(username=username)
        if userid is not None:
            u.userid = userid
        self.db.add(u)
        self.db.flush()
        self._set_links(u, ad_ids)
        self.db.commit()
        self.db.refresh(u)
        return u

    def update_user(self, u: User, username: Optional[str], ad_ids: Optional[List[int]]) -> User:
        u.username = username
        if ad_ids is not None:
            u.ad_links.clear()
            self.db.flush()
            self._set_links(u, ad_ids)
        self.db.add(u)
        self.db.commit()
        self.db.refresh(u)
        return u

    def append_user_ad(self, userid: int, ad_id: int) -> None:
        u = self.db.get(User, userid)
        if u is None:
            raise LookupError(f"user {userid} not found")
        next_pos = max((link.position for link in u.ad_links), default=-1) + 1
        u.ad_links.append(UserAd(user_id=userid, ad_id=ad_id, position=next_pos))
        self.db.commit()

    def user_ad_ids(self, userid: int) -> List[int]:
        return self.db.execute(
            select(UserAd.ad_id).where(UserAd.user_id == userid).order_by(UserAd.position.asc())
        ).scalars().all()

    def rollback(self) -> None:
        self.db.rollback()

    def _set_links(self, u: User, ad_ids: List[int]) -> None:
        for pos, ad_id in enumerate(ad_ids):
            u.ad_links.append(UserAd(user_id=u.userid, ad_id=ad_id, position=pos))
