"""Client for the Vault Transform secrets engine.

This is the only code path through which cardholder data leaves the process.
The PAN passed to ``tokenize`` is written to the request body and nowhere else:
never to a log line, an exception message or a repr.
"""
import logging
from time import monotonic
from typing import Optional, Protocol, Tuple

import httpx

from payment_gateway.errors import NetworkError, ProtocolError
from payment_gateway.schemas import TokenRequest, TokenResponse

logger = logging.getLogger(__name__)

ENCODE_PATH = "/v1/transform/encode/payments"
HEALTH_PATH = "/v1/sys/health"
TOKEN_HEADER = "X-Vault-Token"


class TokenizationClient(Protocol):
    def tokenize(self, pan: str) -> str:
        ...

    def is_healthy(self) -> bool:
        ...


class VaultClient:
    """Talks to Vault over HTTP using a static token.

    A single instance is shared by all requests; the underlying
    ``httpx.Client`` pools connections and is safe to use from worker threads.
    """

    def __init__(
        self,
        token: str,
        address: str,
        timeout: float = 5.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.address = address.rstrip("/")
        self.timeout = timeout
        self._http = httpx.Client(
            base_url=self.address,
            headers={TOKEN_HEADER: token},
            timeout=timeout,
            transport=transport,
        )

    def _send(self, method: str, path: str, **kwargs) -> Tuple[int, bytes]:
        """Send one request and read its body, all within ``self.timeout``.

        httpx's own timeout bounds each phase separately, so a body that
        trickles in is also checked against an overall deadline.
        """
        deadline = monotonic() + self.timeout
        with self._http.stream(method, path, **kwargs) as response:
            body = bytearray()
            for chunk in response.iter_bytes():
                body.extend(chunk)
                if monotonic() > deadline:
                    raise httpx.ReadTimeout(
                        "Vault response exceeded its deadline", request=response.request
                    )
            return response.status_code, bytes(body)

    def tokenize(self, pan: str) -> str:
        """Exchange a PAN for a Vault-issued token.

        Raises:
            NetworkError: Vault could not be reached or the deadline expired.
            ProtocolError: Vault answered with a non-200 status or a body
                without ``data.encoded_value``.
        """
        body = TokenRequest(value=pan).model_dump()

        try:
            status_code, content = self._send("POST", ENCODE_PATH, json=body)
        except httpx.TimeoutException as e:
            raise NetworkError("Vault encode request timed out") from e
        except httpx.TransportError as e:
            raise NetworkError(f"Unable to reach Vault: {type(e).__name__}") from e
        except httpx.HTTPError as e:
            raise ProtocolError(f"Vault encode request failed: {type(e).__name__}") from e

        if status_code != 200:
            logger.warning("Vault encode returned status %d", status_code)
            raise ProtocolError(
                f"Vault returned response code {status_code}, expected status code 200"
            )

        try:
            parsed = TokenResponse.model_validate_json(content)
        except ValueError:
            # pydantic's ValidationError is a ValueError and also covers invalid JSON
            raise ProtocolError("Unable to parse Vault encode response") from None

        return parsed.data.encoded_value

    def is_healthy(self) -> bool:
        """True if Vault is unsealed and answering; never raises."""
        try:
            status_code, _ = self._send("GET", HEALTH_PATH)
        except (httpx.HTTPError, httpx.InvalidURL, RuntimeError) as e:
            logger.warning("Vault health check failed: %s", type(e).__name__)
            return False

        if status_code != 200:
            logger.warning("Vault health check returned status %d", status_code)
            return False
        return True

    def close(self):
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
