"""Shared test fixtures."""

from __future__ import annotations

import itertools
from datetime import date, datetime, timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from core.auth import create_access_token
from core.database import Base, get_db
from main import app
from models.alert import Alert
from models.beach import Beach
from models.forecast import Forecast
from models.log_entry import LogEntry
from models.region import Region
from models.sponsor import Sponsor
from models.user import User


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}",
        connect_args={"check_same_thread": False},
    )

    # pysqlite needs explicit BEGIN for SAVEPOINT to behave
    @event.listens_for(engine, "connect")
    def _no_implicit_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory(expire_on_commit=False)
    yield session
    session.close()


@pytest.fixture
def _override_db(session_factory):
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture
async def client(_override_db):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def auth_headers():
    def _headers(user: User) -> dict:
        token = create_access_token({"sub": user.id})
        return {"Authorization": f"Bearer {token}"}

    return _headers


class Factory:
    """Small helpers that insert and commit rows."""

    def __init__(self, session):
        self.session = session
        self._seq = itertools.count(1)
        self._clock = datetime(2024, 1, 1, 12, 0, 0)

    def _save(self, obj):
        self.session.add(obj)
        self.session.commit()
        return obj

    def _tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def user(self, **kw) -> User:
        n = next(self._seq)
        kw.setdefault("username", f"surfer{n}")
        kw.setdefault("password", "not-a-real-hash")
        kw.setdefault("email", f"surfer{n}@example.com")
        kw.setdefault("name", f"Surfer {n}")
        return self._save(User(**kw))

    def region(self, **kw) -> Region:
        kw.setdefault("name", "Western Cape")
        kw.setdefault("country", "South Africa")
        kw.setdefault("continent", "Africa")
        return self._save(Region(**kw))

    def beach(self, region: Region, **kw) -> Beach:
        kw.setdefault("name", f"Beach {next(self._seq)}")
        kw.setdefault("wave_type", "Beach Break")
        kw.setdefault("difficulty", "Intermediate")
        kw.setdefault("crime_level", "Low")
        kw.setdefault("has_shark_attack", False)
        return self._save(Beach(region_id=region.id, **kw))

    def forecast(self, region: Region, day: date, **kw) -> Forecast:
        kw.setdefault("wind_speed", 8.0)
        kw.setdefault("wind_direction", 315.0)
        kw.setdefault("swell_height", 1.5)
        kw.setdefault("swell_period", 12.0)
        kw.setdefault("swell_direction", 200.0)
        return self._save(Forecast(region_id=region.id, date=day, **kw))

    def log(self, user: User, beach: Beach, day: date, **kw) -> LogEntry:
        kw.setdefault("surfer_name", user.name)
        kw.setdefault("surfer_email", user.email)
        kw.setdefault("surfer_rating", 3)
        kw.setdefault("is_private", False)
        kw.setdefault("is_anonymous", False)
        kw.setdefault("created_at", self._tick())
        return self._save(LogEntry(
            user_id=user.id, beach_id=beach.id, region_id=beach.region_id, date=day, **kw
        ))

    def alert(self, user: User, entry: LogEntry, **kw) -> Alert:
        kw.setdefault("name", "Good swell")
        kw.setdefault("notification_method", "email")
        kw.setdefault("contact_info", user.email)
        kw.setdefault("properties", [])
        kw.setdefault("created_at", self._tick())
        return self._save(Alert(
            user_id=user.id, region_id=entry.region_id, log_entry_id=entry.id,
            forecast_id=entry.forecast_id, **kw
        ))

    def sponsor(self, **kw) -> Sponsor:
        kw.setdefault("name", f"Sponsor {next(self._seq)}")
        kw.setdefault("logo", "/logo.png")
        kw.setdefault("link", "https://example.com")
        return self._save(Sponsor(**kw))


@pytest.fixture
def make(db):
    return Factory(db)
