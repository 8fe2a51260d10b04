from functools import lru_cache

from fastapi import Depends

from payment_gateway import config
from payment_gateway.database import SessionLocal
from payment_gateway.health import HealthAggregator
from payment_gateway.service import PaymentGateway
from payment_gateway.store import OrderStore
from payment_gateway.vault_client import TokenizationClient, VaultClient


@lru_cache()
def get_vault_client() -> TokenizationClient:
    """One Vault client (and connection pool) per process."""
    if not config.VAULT_TOKEN:
        raise RuntimeError("VAULT_TOKEN is not set. Check your .env file.")
    return VaultClient(config.VAULT_TOKEN, config.VAULT_ADDR, timeout=config.VAULT_TIMEOUT)


def get_order_store() -> OrderStore:
    return OrderStore(SessionLocal)


def get_payment_gateway(
    client: TokenizationClient = Depends(get_vault_client),
    store: OrderStore = Depends(get_order_store),
) -> PaymentGateway:
    return PaymentGateway(client, store)


def get_health_aggregator(
    client: TokenizationClient = Depends(get_vault_client),
    store: OrderStore = Depends(get_order_store),
) -> HealthAggregator:
    return HealthAggregator(client, store)
