import pytest
from fastapi.testclient import TestClient

from geoquiz.api.deps import SCREENS, get_position_repository
from geoquiz.core.config import settings
from geoquiz.domain.question_bank import QUESTION_BANK
from geoquiz.domain.model import QuizState
from geoquiz.main import app
from geoquiz.repositories.position_repository import PositionRepository


class FakeRedis:
    """The handful of async hash commands PositionRepository uses."""

    def __init__(self) -> None:
        self.hashes: dict[str, dict[str, str]] = {}
        self.ttls: dict[str, int] = {}

    async def hset(self, key, mapping):
        self.hashes.setdefault(key, {}).update({k: str(v) for k, v in mapping.items()})
        return len(mapping)

    async def hget(self, key, field):
        return self.hashes.get(key, {}).get(field)

    async def expire(self, key, seconds):
        self.ttls[key] = seconds
        return key in self.hashes

    async def delete(self, key):
        self.ttls.pop(key, None)
        return 1 if self.hashes.pop(key, None) is not None else 0


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def state():
    return QuizState(QUESTION_BANK)


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def repo(fake_redis):
    return PositionRepository(fake_redis, ttl_seconds=60)


@pytest.fixture
def client(repo, tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "LOG_DIR", str(tmp_path / "logs"))
    SCREENS.clear()
    app.dependency_overrides[get_position_repository] = lambda: repo
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    SCREENS.clear()
