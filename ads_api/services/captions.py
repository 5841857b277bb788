# ads_api/services/captions.py
from __future__ import annotations

from dataclasses import dataclass

from ..models.ad import Ad

PRICE_TIER_STEP = 10000


@dataclass(frozen=True)
class Caption:
    text: str
    district_tag: str   # "New_Cairo"
    price_tag: str      # "20000"


def price_tier(price: int) -> int:
    """Price rounded up to the next multiple of 10 000 (10000 -> 10000, 10001 -> 20000)."""
    if price is None or price < 1:
        raise ValueError("price must be a positive integer")
    return ((price - 1) // PRICE_TIER_STEP + 1) * PRICE_TIER_STEP


def district_hash(district: str) -> str:
    return (district or "").replace(" ", "_")


def format_caption(ad: Ad) -> Caption:
    district_tag = district_hash(ad.district)
    price_tag = str(price_tier(ad.price))
    text = (
        f"#{district_tag}, #under_{price_tag}\n\n"
        f"Rooms: {ad.rooms}\n"
        f"Price: {ad.price} AED/Year\n"
        f"Type: {ad.type}\n"
        f"Area: {ad.area} sqm\n"
        f"Building: {ad.building}\n"
        f"District: {ad.district}\n\n"
        f"{ad.text}\n\n"
        f"Contact: @{ad.username}"
    )
    return Caption(text=text, district_tag=district_tag, price_tag=price_tag)
