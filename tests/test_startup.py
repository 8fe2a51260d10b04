import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine

from conftest import encode_ok
from payment_gateway import dependencies
from payment_gateway.database import Base, wait_for_store
from payment_gateway.dependencies import get_order_store, get_vault_client
from payment_gateway.main import app as fastapi_app


@pytest.fixture
def unreachable_engine(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'missing' / 'orders.db'}")
    yield engine
    engine.dispose()


def test_wait_for_store_gives_up_after_attempts(unreachable_engine, mocker):
    sleep = mocker.patch("time.sleep")

    assert wait_for_store(unreachable_engine, attempts=3, delay=7) is False
    assert sleep.call_count == 2
    sleep.assert_called_with(7)


def test_wait_for_store_connects(tmp_path, mocker):
    sleep = mocker.patch("time.sleep")
    engine = create_engine(f"sqlite:///{tmp_path / 'orders.db'}")

    assert wait_for_store(engine, attempts=3, delay=7) is True
    sleep.assert_not_called()
    engine.dispose()


def test_startup_with_unreachable_store_still_serves_health(make_vault_client, broken_store, mocker):
    mocker.patch("payment_gateway.main.wait_for_store", return_value=False)
    create_all = mocker.patch.object(Base.metadata, "create_all")
    vault = make_vault_client(encode_ok("tok"))
    fastapi_app.dependency_overrides[get_vault_client] = lambda: vault
    fastapi_app.dependency_overrides[get_order_store] = lambda: broken_store

    with TestClient(fastapi_app) as client:
        response = client.get("/health")

    fastapi_app.dependency_overrides.clear()

    create_all.assert_not_called()
    assert response.status_code == 200
    assert response.json() == {"vault": "OK", "db": "Fail"}


def test_get_vault_client_requires_token(monkeypatch):
    monkeypatch.setattr(dependencies.config, "VAULT_TOKEN", "")
    get_vault_client.cache_clear()

    with pytest.raises(RuntimeError):
        get_vault_client()

    get_vault_client.cache_clear()
