# ads_api/routers/ads.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from ..deps import get_ad_service
from ..schemas import AdIn
from ..services.ads import AdService

router = APIRouter(prefix="/ads", tags=["ads"])


# ---------- CRUD ----------
@router.post("", status_code=status.HTTP_201_CREATED)
def create_ad(payload: AdIn, svc: AdService = Depends(get_ad_service)):
    ad = svc.create(payload.model_dump())
    return {"ok": True, "ad": ad.to_dict()}


@router.get("")
def list_ads(
    userid: Optional[int] = Query(None),
    svc: AdService = Depends(get_ad_service),
):
    return {"ok": True, "items": [a.to_dict() for a in svc.list(userid)]}


@router.get("/{ad_id}")
def get_ad(ad_id: int, svc: AdService = Depends(get_ad_service)):
    return {"ok": True, "ad": svc.get(ad_id).to_dict()}


@router.put("/{ad_id}")
def update_ad(ad_id: int, payload: AdIn, svc: AdService = Depends(get_ad_service)):
    ad = svc.update(ad_id, payload.model_dump())
    return {"ok": True, "ad": ad.to_dict()}


@router.delete("/{ad_id}")
def delete_ad(ad_id: int, svc: AdService = Depends(get_ad_service)):
    svc.remove(ad_id)
    return {"ok": True, "deleted": ad_id}


# ---------- Telegram ----------
@router.post("/{ad_id}/post")
def post_ad(ad_id: int, response: Response, svc: AdService = Depends(get_ad_service)):
    outcome = svc.publish(ad_id)
    if outcome.degraded:
        # posted to the channel, but Telegram returned no message to edit later
        response.status_code = status.HTTP_202_ACCEPTED
        return {
            "ok": True,
            "degraded": True,
            "detail": "Ad posted but Telegram returned no message id; the post cannot be edited",
            "ad": outcome.ad.to_dict(),
        }
    return {
        "ok": True,
        "degraded": False,
        "detail": "Ad successfully posted to Telegram channel",
        "ad": outcome.ad.to_dict(),
    }


@router.post("/{ad_id}/edit-post")
def edit_post(ad_id: int, svc: AdService = Depends(get_ad_service)):
    ad = svc.edit_published(ad_id)
    return {"ok": True, "detail": "Ad successfully updated in Telegram channel", "ad": ad.to_dict()}
