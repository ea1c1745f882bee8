import pytest
from fastapi.testclient import TestClient

from batepapo.config import Settings
from batepapo.main import create_app


class FakeClock:
    """Manually advanced replacement for ``time.time``."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'chat.db'}",
        # The periodic loop never fires during a test; sweeps are run by hand.
        sweep_interval_seconds=3600,
        session_timeout_seconds=10,
        db_wait_tries=1,
    )


@pytest.fixture
def app(settings, clock):
    return create_app(settings, clock=clock)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def sweeper(app, client):
    return app.state.sweeper
