import pytest

from tests.unit.domain.fakes import FakeLedgerClient


@pytest.fixture
def ledger() -> FakeLedgerClient:
    return FakeLedgerClient()
