# ads_api/schemas.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class AdIn(BaseModel):
    user_id: int
    username: Optional[str] = None
    photos: str
    rooms: Optional[str] = None
    price: int = Field(gt=0)
    type: Optional[str] = None
    area: int = Field(gt=0)
    building: Optional[str] = None
    district: Optional[str] = None
    text: Optional[str] = None

    @field_validator("photos")
    @classmethod
    def _at_least_one_photo(cls, v: str) -> str:
        if not any(p.strip() for p in v.split(",")):
            raise ValueError("at least one photo is required")
        return v

    @field_validator("rooms", mode="before")
    @classmethod
    def _rooms_as_text(cls, v):
        # clients send both 2 and "2"
        return str(v) if isinstance(v, int) else v


class UserIn(BaseModel):
    userid: Optional[int] = None
    username: Optional[str] = None
    ads: Optional[str] = None   # "1,2,3"


class UserUpdate(BaseModel):
    username: Optional[str] = None
    ads: Optional[str] = None
