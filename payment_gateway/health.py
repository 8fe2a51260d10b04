import logging

from payment_gateway.schemas import HealthState, HealthStatus
from payment_gateway.store import OrderStore
from payment_gateway.vault_client import TokenizationClient

logger = logging.getLogger(__name__)


class HealthAggregator:
    """Composite health over Vault and the database.

    Each probe is evaluated on its own; one failing (or raising) never
    affects the other, and ``health()`` always returns a status.
    """

    def __init__(self, client: TokenizationClient, store: OrderStore):
        self.client = client
        self.store = store

    def health(self) -> HealthStatus:
        logger.info("Health Check")
        return HealthStatus(
            vault=HealthState.from_probe(self._run("vault", self.client.is_healthy)),
            db=HealthState.from_probe(self._run("db", self.store.probe)),
        )

    @staticmethod
    def _run(name, probe) -> bool:
        try:
            return bool(probe())
        except Exception as e:
            logger.error("%s health probe raised %s", name, type(e).__name__)
            return False
