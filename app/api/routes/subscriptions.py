"""
Subscriptions API Routes
CRUD over subscriptions plus the price total for a period
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.api.dependencies import get_subscription_service
from app.core.exceptions import AppError, NotFoundError, StorageError
from app.schemas.subscription import (
    SubscriptionCreate,
    SubscriptionSchema,
    SubscriptionSum,
    SubscriptionUpdate,
)
from app.services.subscription_service import SubscriptionService

logger = logging.getLogger(__name__)

router = APIRouter()


def _bad_request(exc: AppError) -> HTTPException:
    if isinstance(exc, StorageError):
        logger.error("Subscription storage failure: %s", exc)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.post("", response_model=SubscriptionSchema, status_code=status.HTTP_201_CREATED)
def create_subscription(
    payload: SubscriptionCreate,
    service: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionSchema:
    try:
        return service.create_subscription(payload)
    except AppError as exc:
        raise _bad_request(exc) from exc


@router.get("", response_model=List[SubscriptionSchema])
def list_subscriptions(
    user_id: Optional[str] = None,
    service_name: Optional[str] = None,
    service: SubscriptionService = Depends(get_subscription_service),
) -> List[SubscriptionSchema]:
    """
    List a user's subscriptions, optionally for one service
    """
    if not user_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="user_id is required")
    try:
        return service.list_subscriptions(user_id, service_name or None)
    except AppError as exc:
        raise _bad_request(exc) from exc


@router.get("/sum", response_model=SubscriptionSum)
def sum_subscriptions(
    user_id: Optional[str] = None,
    service_name: Optional[str] = None,
    date_from: Optional[str] = Query(default=None, alias="from"),
    date_to: Optional[str] = Query(default=None, alias="to"),
    service: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionSum:
    """
    Total price of a user's subscriptions starting within [from, to] (MM-YYYY)
    """
    if not user_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="user_id is required")
    if not date_from or not date_to:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="from and to are required")
    try:
        total = service.sum_subscriptions(user_id, service_name or None, date_from, date_to)
    except AppError as exc:
        raise _bad_request(exc) from exc
    return SubscriptionSum(sum=total)


@router.get("/{subscription_id}", response_model=SubscriptionSchema)
def get_subscription(
    subscription_id: str,
    service: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionSchema:
    try:
        return service.get_subscription(subscription_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except AppError as exc:
        raise _bad_request(exc) from exc


@router.put("/{subscription_id}", response_model=SubscriptionSchema)
def update_subscription(
    subscription_id: str,
    payload: SubscriptionUpdate,
    service: SubscriptionService = Depends(get_subscription_service),
) -> SubscriptionSchema:
    try:
        return service.update_subscription(subscription_id, payload)
    except AppError as exc:
        raise _bad_request(exc) from exc


@router.delete("/{subscription_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_subscription(
    subscription_id: str,
    service: SubscriptionService = Depends(get_subscription_service),
) -> Response:
    try:
        service.delete_subscription(subscription_id)
    except AppError as exc:
        raise _bad_request(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
