"""Shared API dependencies."""
from fastapi import Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.repositories.subscription_repository import SubscriptionRepository
from app.services.subscription_service import SubscriptionService


def get_subscription_service(db: Session = Depends(get_db)) -> SubscriptionService:
    return SubscriptionService(SubscriptionRepository(db))


__all__ = ["get_db", "get_subscription_service"]
