# ads_api/services/users.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError

from ..errors import Conflict, NotFound, ValidationError
from ..models.ad import Ad
from ..models.user import User
from ..repository import AdRepository

logger = logging.getLogger(__name__)


def parse_ad_ids(raw: Optional[str]) -> List[int]:
    """'1,2, 3' -> [1, 2, 3]; empty or None -> []."""
    if raw is None:
        return []
    ids = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        # isdigit() alone accepts "²" and other digits int() rejects
        if not (part.isascii() and part.isdigit()):
            raise ValidationError(f"ads must be a comma-separated list of ids, got {part!r}")
        ids.append(int(part))
    return ids


class UserService:
    def __init__(self, repo: AdRepository):
        self.repo = repo

    def _load(self, userid: int) -> User:
        u = self.repo.get_user(userid)
        if not u:
            raise NotFound("User not found")
        return u

    def get(self, userid: int) -> User:
        return self._load(userid)

    def list(self) -> List[User]:
        return self.repo.list_users()

    def create(self, data: Dict[str, Any]) -> User:
        userid = data.get("userid")
        if userid is not None and self.repo.get_user(userid):
            raise Conflict(f"User {userid} already exists")
        ad_ids = parse_ad_ids(data.get("ads"))
        try:
            u = self.repo.insert_user(userid, data.get("username"), ad_ids)
        except IntegrityError:
            # a concurrent create took the same userid after the check above
            self.repo.rollback()
            raise Conflict(f"User {userid} already exists") from None
        logger.info("User created: userid=%s", u.userid)
        return u

    def update(self, userid: int, data: Dict[str, Any]) -> User:
        u = self._load(userid)
        ad_ids = parse_ad_ids(data["ads"]) if data.get("ads") is not None else None
        u = self.repo.update_user(u, data.get("username"), ad_ids)
        logger.info("User updated: userid=%s", u.userid)
        return u

    def list_ads(self, userid: int) -> List[Ad]:
        self._load(userid)
        return self.repo.list_ads_by_ids(self.repo.user_ad_ids(userid))
