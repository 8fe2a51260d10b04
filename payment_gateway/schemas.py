from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, SecretStr


# --- Gateway API ---

class PaymentRequest(BaseModel):
    # SecretStr keeps the PAN out of repr(), str() and tracebacks
    card_number: Optional[SecretStr] = None
    expiration: Optional[str] = None
    cv2: Optional[SecretStr] = None


class PaymentResponse(BaseModel):
    transaction_id: int


class HealthState(str, Enum):
    OK = "OK"
    FAIL = "Fail"

    @classmethod
    def from_probe(cls, healthy: bool) -> "HealthState":
        return cls.OK if healthy else cls.FAIL


class HealthStatus(BaseModel):
    vault: HealthState
    db: HealthState


# --- Vault Transform engine ---

class TokenRequest(BaseModel):
    value: str = Field(repr=False)


class TokenResponseData(BaseModel):
    encoded_value: str = Field(min_length=1)


class TokenResponse(BaseModel):
    data: TokenResponseData
