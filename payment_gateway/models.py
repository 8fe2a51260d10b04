from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String
from payment_gateway.database import Base


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    card_number = Column(String, nullable=False)    # Vault token, never the PAN
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime, nullable=True)    # soft delete

    @property
    def token(self):
        return self.card_number

    def __repr__(self):
        return f"Order(id={self.id!r}, token={self.card_number!r})"
