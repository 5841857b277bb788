# ads_api/routers/users.py
from fastapi import APIRouter, Depends, status

from ..deps import get_user_service
from ..schemas import UserIn, UserUpdate
from ..services.users import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_user(payload: UserIn, svc: UserService = Depends(get_user_service)):
    u = svc.create(payload.model_dump())
    return {"ok": True, "user": u.to_dict()}


@router.get("")
def list_users(svc: UserService = Depends(get_user_service)):
    return {"ok": True, "items": [u.to_dict() for u in svc.list()]}


@router.get("/{userid}")
def get_user(userid: int, svc: UserService = Depends(get_user_service)):
    return {"ok": True, "user": svc.get(userid).to_dict()}


@router.put("/{userid}")
def update_user(userid: int, payload: UserUpdate, svc: UserService = Depends(get_user_service)):
    u = svc.update(userid, payload.model_dump())
    return {"ok": True, "user": u.to_dict()}


@router.get("/{userid}/ads")
def get_user_ads(userid: int, svc: UserService = Depends(get_user_service)):
    return {"ok": True, "items": [a.to_dict() for a in svc.list_ads(userid)]}
