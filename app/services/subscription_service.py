from __future__ import annotations

import logging
import re
from datetime import date
from typing import Optional

from app.core.exceptions import PersistenceError, StorageError, ValidationError
from app.repositories.subscription_repository import SubscriptionRepository
from app.schemas.subscription import SubscriptionCreate, SubscriptionSchema, SubscriptionUpdate

logger = logging.getLogger(__name__)

MONTH_YEAR_PATTERN = re.compile(r"([0-9]{2})-([0-9]{4})")


def parse_month_year(value: str, field: str) -> date:
    """Parse ``MM-YYYY`` text into the first day of that month.

    The result carries no time component; it stands for midnight UTC on the
    1st. Anything other than two-digit month, ``-``, four-digit year fails.
    """
    match = MONTH_YEAR_PATTERN.fullmatch(value or "")
    if not match:
        raise ValidationError(f"invalid {field}: expected MM-YYYY, got {value!r}")
    month, year = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValidationError(f"invalid {field}: month {month:02d} out of range")
    try:
        return date(year, month, 1)
    except ValueError as exc:
        raise ValidationError(f"invalid {field}: {exc}") from exc


def _require(value: Optional[str], field: str) -> str:
    if not value:
        raise ValidationError(f"{field} is required")
    return value


class SubscriptionService:
    def __init__(self, repository: SubscriptionRepository):
        self.repository = repository

    def create_subscription(self, payload: SubscriptionCreate) -> SubscriptionSchema:
        service_name = _require(payload.service_name, "service_name")
        if payload.price is None or payload.price <= 0:
            raise ValidationError("price must be > 0")
        user_id = _require(payload.user_id, "user_id")
        start_date = parse_month_year(_require(payload.start_date, "start_date"), "start_date")
        end_date = parse_month_year(payload.end_date, "end_date") if payload.end_date else None

        try:
            record = self.repository.create(
                service_name=service_name,
                price=payload.price,
                user_id=user_id,
                start_date=start_date,
                end_date=end_date,
            )
        except StorageError as exc:
            raise PersistenceError(f"failed to create subscription: {exc}") from exc

        logger.info("Created subscription %s for user %s", record.id, record.user_id)
        return record

    def get_subscription(self, subscription_id: str) -> SubscriptionSchema:
        _require(subscription_id, "id")
        return self.repository.get_by_id(subscription_id)

    def update_subscription(self, subscription_id: str, payload: SubscriptionUpdate) -> SubscriptionSchema:
        """Merge the supplied fields onto the stored record and write it back.

        The row stays locked from the read until the write commits, so two
        concurrent updates of one subscription cannot overwrite each other.
        """
        _require(subscription_id, "id")
        current = self.repository.get_by_id(subscription_id, for_update=True)

        changes: dict = {}
        if payload.service_name:
            changes["service_name"] = payload.service_name
        if payload.price is not None and payload.price > 0:
            changes["price"] = payload.price
        if payload.user_id:
            changes["user_id"] = payload.user_id
        if payload.start_date:
            changes["start_date"] = parse_month_year(payload.start_date, "start_date")
        if payload.end_date:
            changes["end_date"] = parse_month_year(payload.end_date, "end_date")

        merged = current.model_copy(update=changes)
        self.repository.update(merged)
        logger.info("Updated subscription %s (%s)", merged.id, ", ".join(sorted(changes)) or "no changes")
        return merged

    def delete_subscription(self, subscription_id: str) -> None:
        _require(subscription_id, "id")
        self.repository.delete(subscription_id)
        logger.info("Deleted subscription %s", subscription_id)

    def list_subscriptions(self, user_id: str, service_name: Optional[str] = None) -> list[SubscriptionSchema]:
        _require(user_id, "user_id")
        return self.repository.list(user_id, service_name)

    def sum_subscriptions(
        self,
        user_id: str,
        service_name: Optional[str],
        from_text: str,
        to_text: str,
    ) -> int:
        _require(user_id, "user_id")
        date_from = parse_month_year(from_text, "from")
        date_to = parse_month_year(to_text, "to")
        return self.repository.sum_prices(user_id, service_name, date_from, date_to)
