import time
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from account_service.core.config import Settings
from account_service.core.database import build_engine, build_session_factory, init_db
from account_service.crud.user import UserCRUD
from account_service.main import create_app
from account_service.services.session_cache import SessionCache
from account_service.services.user_service import UserService


class InMemoryRedis:
    """Stand-in for redis.Redis covering the calls the session cache makes.

    Expiry is checked against a clock that tests can move forward with advance().
    """

    def __init__(self):
        self.store = {}
        self.expiries = {}
        self._offset = 0.0

    def _now(self):
        return time.monotonic() + self._offset

    def _evict(self, name):
        expires_at = self.expiries.get(name)
        if expires_at is not None and expires_at <= self._now():
            self.store.pop(name, None)
            self.expiries.pop(name, None)

    def advance(self, seconds):
        self._offset += seconds

    def set(self, name, value, ex=None):
        self.store[name] = value
        if ex is not None:
            self.expiries[name] = self._now() + ex
        else:
            self.expiries.pop(name, None)
        return True

    def get(self, name):
        self._evict(name)
        return self.store.get(name)

    def delete(self, *names):
        removed = 0
        for name in names:
            self._evict(name)
            if name in self.store:
                del self.store[name]
                self.expiries.pop(name, None)
                removed += 1
        return removed

    def ttl(self, name):
        self._evict(name)
        if name not in self.store:
            return -2
        expires_at = self.expiries.get(name)
        if expires_at is None:
            return -1
        return int(round(expires_at - self._now()))

    def close(self):
        pass


@pytest.fixture
def settings():
    return Settings(
        DATABASE_URL="sqlite://",
        REDIS_URL="redis://localhost:6379/15",
        USER_TOKEN_KEY_PREFIX="user:token:",
        USER_TOKEN_TTL_MINUTES=30,
        CORS_ORIGINS="http://testserver",
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
def engine(settings):
    # One shared connection so the in-memory database survives across sessions
    engine = build_engine(settings.DATABASE_URL, poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = build_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def fake_redis():
    return InMemoryRedis()


@pytest.fixture
def session_cache(fake_redis, settings):
    return SessionCache.from_settings(fake_redis, settings)


@pytest.fixture
def service(db, session_cache):
    return UserService(UserCRUD(db), session_cache)


@pytest.fixture
def client(settings, engine, fake_redis):
    app = create_app(settings, engine=engine, redis_client=fake_redis)
    with TestClient(app) as test_client:
        yield test_client
