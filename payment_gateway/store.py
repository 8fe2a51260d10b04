import logging
from typing import List, Optional

from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from payment_gateway.errors import StorageError
from payment_gateway.models import Order, utcnow

logger = logging.getLogger(__name__)


class OrderStore:
    """Persists Vault tokens as orders.

    Only ever handed a token; the PAN never reaches this layer.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def save(self, token: str) -> Order:
        now = utcnow()
        order = Order(card_number=token, created_at=now, updated_at=now)

        with self._session_factory() as db:
            try:
                db.add(order)
                db.commit()
                db.refresh(order)
            except SQLAlchemyError as e:
                db.rollback()
                logger.error("Unable to insert order: %s", type(e).__name__)
                raise StorageError(f"Unable to save data to db: {type(e).__name__}") from e

        logger.info("Order saved", extra={"order_id": order.id})
        return order

    def find_by_id(self, order_id: int, include_deleted: bool = False) -> Optional[Order]:
        with self._session_factory() as db:
            try:
                order = db.get(Order, order_id)
            except SQLAlchemyError as e:
                raise StorageError(f"Unable to read order: {type(e).__name__}") from e

        if order is None or (order.deleted_at is not None and not include_deleted):
            return None
        return order

    def find_all(self, include_deleted: bool = False) -> List[Order]:
        query = select(Order).order_by(Order.id)
        if not include_deleted:
            query = query.where(Order.deleted_at.is_(None))

        with self._session_factory() as db:
            try:
                return list(db.scalars(query).all())
            except SQLAlchemyError as e:
                raise StorageError(f"Unable to read orders: {type(e).__name__}") from e

    def soft_delete(self, order_id: int) -> Optional[Order]:
        with self._session_factory() as db:
            try:
                order = db.get(Order, order_id)
                if order is None:
                    return None
                if order.deleted_at is None:
                    now = utcnow()
                    order.deleted_at = now
                    order.updated_at = now
                    db.commit()
                    db.refresh(order)
            except SQLAlchemyError as e:
                db.rollback()
                raise StorageError(f"Unable to delete order: {type(e).__name__}") from e
        return order

    def probe(self) -> bool:
        """Can a connection be obtained and used? Never raises."""
        try:
            with self._session_factory() as db:
                db.execute(text("SELECT 1"))
        except Exception as e:
            logger.warning("Database health check failed: %s", type(e).__name__)
            return False
        return True
