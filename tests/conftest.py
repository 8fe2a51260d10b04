import os

# Must be set before payment_gateway.config is imported
os.environ["DATABASE_URL"] = "sqlite:///./test_app.db"
os.environ["VAULT_TOKEN"] = "root"
os.environ["VAULT_ADDR"] = "http://vault.test:8200"
os.environ["DATABASE_CONNECT_ATTEMPTS"] = "1"

import json

import httpx
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from payment_gateway.database import Base
from payment_gateway.store import OrderStore
from payment_gateway.vault_client import VaultClient

PAN = "4111111111111111"


def encode_ok(token):
    """A Vault handler that answers every encode with ``token``."""
    def handler(request):
        if request.url.path == "/v1/sys/health":
            return httpx.Response(200, json={"initialized": True, "sealed": False})
        return httpx.Response(200, json={"data": {"encoded_value": token}})
    return handler


@pytest.fixture
def vault_requests():
    return []


@pytest.fixture
def make_vault_client(vault_requests):
    """Build a VaultClient whose HTTP traffic goes to ``handler``."""
    clients = []

    def factory(handler):
        def recording_handler(request):
            vault_requests.append(request)
            return handler(request)

        client = VaultClient(
            "root",
            "http://vault.test:8200",
            timeout=1.0,
            transport=httpx.MockTransport(recording_handler),
        )
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()


@pytest.fixture
def session_factory(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'orders.db'}", connect_args={"check_same_thread": False}
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def store(session_factory):
    return OrderStore(session_factory)


@pytest.fixture
def broken_store(tmp_path):
    """An OrderStore whose database can never be opened."""
    engine = create_engine(f"sqlite:///{tmp_path / 'missing' / 'nowhere' / 'orders.db'}")
    yield OrderStore(sessionmaker(bind=engine))
    engine.dispose()


def request_body(request):
    return json.loads(request.content)
