from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from .base import Base


class User(Base):
    __tablename__ = "users"

    userid = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String, nullable=True)

    # owned-ad projection, insertion order
    ad_links = relationship(
        "UserAd",
        order_by="UserAd.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def ad_ids(self) -> list[int]:
        return [link.ad_id for link in self.ad_links]

    def to_dict(self) -> dict:
        ids = self.ad_ids
        return {
            "userid": self.userid,
            "username": self.username,
            # wire format kept as a comma-delimited string
            "ads": ",".join(str(i) for i in ids) if ids else None,
        }


class UserAd(Base):
    __tablename__ = "user_ads"
    __table_args__ = (UniqueConstraint("user_id", "position", name="uq_user_ads_position"),)

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.userid", ondelete="CASCADE"), nullable=False, index=True)
    # no FK to ads: the projection may lag behind the ads table
    ad_id = Column(Integer, nullable=False)
    position = Column(Integer, nullable=False)
