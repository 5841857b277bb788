# ads_api/deps.py
from __future__ import annotations

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from .db import get_db
from .repository import AdRepository
from .services.ads import AdService
from .services.telegram import TelegramPublisher
from .services.users import UserService


def get_repository(db: Session = Depends(get_db)) -> AdRepository:
    return AdRepository(db)


def get_publisher(request: Request) -> TelegramPublisher:
    return request.app.state.publisher


def get_ad_service(
    request: Request,
    repo: AdRepository = Depends(get_repository),
    publisher: TelegramPublisher = Depends(get_publisher),
) -> AdService:
    return AdService(repo, publisher, request.app.state.publish_locks)


def get_user_service(repo: AdRepository = Depends(get_repository)) -> UserService:
    return UserService(repo)
