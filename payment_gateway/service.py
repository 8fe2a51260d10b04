"""Payment orchestration: validate, tokenize, persist, respond."""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from payment_gateway.errors import (
    GatewayError,
    NetworkError,
    ProtocolError,
    StorageError,
    ValidationError,
)
from payment_gateway.schemas import PaymentRequest, PaymentResponse
from payment_gateway.store import OrderStore
from payment_gateway.vault_client import TokenizationClient

logger = logging.getLogger(__name__)


class PaymentState(str, Enum):
    RECEIVED = "received"
    VALIDATING = "validating"
    TOKENIZING = "tokenizing"
    PERSISTING = "persisting"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class PaymentResult:
    """Outcome of one payment request.

    ``state`` is COMPLETED on success; on failure it is the stage that
    failed (VALIDATING, TOKENIZING or PERSISTING).
    """
    state: PaymentState
    response: Optional[PaymentResponse] = None
    error: Optional[GatewayError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> PaymentResponse:
        if self.error is not None:
            raise self.error
        return self.response


class PaymentGateway:
    def __init__(self, client: TokenizationClient, store: OrderStore):
        self.client = client
        self.store = store

    def pay(self, request: PaymentRequest) -> PaymentResult:
        state = PaymentState.RECEIVED
        logger.info("New payment")

        try:
            state = PaymentState.VALIDATING
            pan = self._card_number(request)

            state = PaymentState.TOKENIZING
            token = self.client.tokenize(pan)
            if pan in token:
                raise ProtocolError("Vault returned a token containing the card number")

            state = PaymentState.PERSISTING
            order = self.store.save(token)
        except (ValidationError, NetworkError, ProtocolError, StorageError) as e:
            logger.error(
                "Payment failed while %s",
                state.value,
                extra={"error_kind": e.kind.value, "error": e.message},
            )
            return PaymentResult(state=state, error=e)

        logger.info("Payment completed", extra={"order_id": order.id})
        return PaymentResult(
            state=PaymentState.COMPLETED,
            response=PaymentResponse(transaction_id=order.id),
        )

    @staticmethod
    def _card_number(request: PaymentRequest) -> str:
        if request.card_number is None:
            raise ValidationError("card_number is required")
        pan = request.card_number.get_secret_value().strip()
        if not pan:
            raise ValidationError("card_number must not be empty")
        return pan
