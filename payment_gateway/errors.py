"""Failure kinds raised by the gateway's collaborators.

Messages must never include cardholder data; build them from status codes
and exception class names only.
"""
from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NETWORK = "network"
    PROTOCOL = "protocol"
    STORAGE = "storage"


class GatewayError(Exception):
    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(GatewayError):
    """Missing or malformed request field."""
    kind = ErrorKind.VALIDATION


class NetworkError(GatewayError):
    """Transport failure talking to Vault or the database."""
    kind = ErrorKind.NETWORK


class ProtocolError(GatewayError):
    """Vault answered with an unexpected status or an unparseable body."""
    kind = ErrorKind.PROTOCOL


class StorageError(GatewayError):
    """The order could not be persisted or read."""
    kind = ErrorKind.STORAGE
