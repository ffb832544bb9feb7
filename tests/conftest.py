import pytest
from fastapi.testclient import TestClient

from leaderboard.app import create_app
from leaderboard.config import Settings
from leaderboard.service import RankingService
from leaderboard.store import RankingStore


@pytest.fixture()
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'leaderboard.db'}",
        rate_limit_enabled=False,
        log_level="WARNING",
    )


@pytest.fixture()
def store(settings):
    store = RankingStore(settings.database_url)
    store.init_schema()
    yield store
    store.dispose()


@pytest.fixture()
def service(store):
    return RankingService(store)


@pytest.fixture()
def client(settings, store):
    application = create_app(settings, store=store)
    with TestClient(application) as test_client:
        yield test_client
