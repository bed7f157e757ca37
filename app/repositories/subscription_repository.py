"""Storage gateway for subscription rows."""
from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from datetime import date
from typing import Iterator, Optional

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, StorageError
from app.models import Subscription
from app.schemas.subscription import SubscriptionSchema

logger = logging.getLogger(__name__)

subscriptions = Subscription.__table__


def _parse_id(value: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def _to_record(row) -> SubscriptionSchema:
    return SubscriptionSchema.model_validate(dict(row._mapping))


class SubscriptionRepository:
    """Runs one parameterized statement per operation against ``subscriptions``."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _storage_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Failed to %s: %s", action, exc)
            raise StorageError(f"failed to {action}: {exc}") from exc

    def create(
        self,
        service_name: str,
        price: int,
        user_id: str,
        start_date: date,
        end_date: Optional[date] = None,
    ) -> SubscriptionSchema:
        stmt = (
            insert(subscriptions)
            .values(
                service_name=service_name,
                price=price,
                user_id=user_id,
                start_date=start_date,
                end_date=end_date,
            )
            .returning(*subscriptions.c)
        )
        with self._storage_errors("create subscription"):
            row = self.db.execute(stmt).one()
            self.db.commit()
        return _to_record(row)

    def get_by_id(self, subscription_id: str, for_update: bool = False) -> SubscriptionSchema:
        """Fetch one row; ``for_update`` keeps it locked until the next commit."""
        key = _parse_id(subscription_id)
        if key is None:
            raise NotFoundError(f"subscription {subscription_id} not found")

        stmt = select(subscriptions).where(subscriptions.c.id == key)
        if for_update:
            stmt = stmt.with_for_update()
        with self._storage_errors("get subscription"):
            row = self.db.execute(stmt).first()
        if row is None:
            raise NotFoundError(f"subscription {subscription_id} not found")
        return _to_record(row)

    def update(self, record: SubscriptionSchema) -> None:
        # A missing row updates nothing and is not reported.
        stmt = (
            update(subscriptions)
            .where(subscriptions.c.id == record.id)
            .values(
                service_name=record.service_name,
                price=record.price,
                user_id=record.user_id,
                start_date=record.start_date,
                end_date=record.end_date,
                updated_at=func.now(),
            )
        )
        with self._storage_errors("update subscription"):
            self.db.execute(stmt)
            self.db.commit()

    def delete(self, subscription_id: str) -> None:
        key = _parse_id(subscription_id)
        if key is None:
            return
        with self._storage_errors("delete subscription"):
            self.db.execute(delete(subscriptions).where(subscriptions.c.id == key))
            self.db.commit()

    def list(self, user_id: str, service_name: Optional[str] = None) -> list[SubscriptionSchema]:
        stmt = select(subscriptions).where(subscriptions.c.user_id == user_id)
        if service_name is not None:
            stmt = stmt.where(subscriptions.c.service_name == service_name)
        with self._storage_errors("list subscriptions"):
            rows = self.db.execute(stmt).all()
        return [_to_record(row) for row in rows]

    def sum_prices(
        self,
        user_id: str,
        service_name: Optional[str],
        date_from: date,
        date_to: date,
    ) -> int:
        stmt = select(func.coalesce(func.sum(subscriptions.c.price), 0)).where(
            subscriptions.c.user_id == user_id,
            subscriptions.c.start_date >= date_from,
            subscriptions.c.start_date <= date_to,
        )
        if service_name is not None:
            stmt = stmt.where(subscriptions.c.service_name == service_name)
        with self._storage_errors("sum subscriptions"):
            total = self.db.execute(stmt).scalar_one()
        return int(total or 0)
