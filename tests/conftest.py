import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.services.LedgerStore import InMemoryLedgerStore
from tests.fakes import FakeClock, FakeNotifier


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def ledger_store():
    return InMemoryLedgerStore()


@pytest.fixture
def test_settings():
    return Settings(
        ENVIRONMENT="test",
        EVENT_NAME="VYOMANG",
        UPI_ID="vyomang@okaxis",
        UPI_PAYEE_NAME="VYOMANG Fest",
        TICKET_PRICE=800,
        OTP_SWEEP_INTERVAL_SECONDS=60,
    )


@pytest.fixture
def client(test_settings, notifier, ledger_store):
    from app.core.services import service_manager
    from app.main import app

    service_manager.init(test_settings, notifier=notifier, ledger_store=ledger_store)
    with TestClient(app) as test_client:
        yield test_client
    service_manager.close()
