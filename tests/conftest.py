from datetime import datetime

import pytest

# Monday, 10:15 local time
FIXED_NOW = datetime(2025, 3, 3, 10, 15)


class MutableClock:
    """Clock that tests can move forward."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class RecordingNotifier:
    """Notifier that remembers what it was asked to send."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent = []

    def send_booking_confirmation(self, meeting):
        if self.fail:
            raise RuntimeError("email provider down")
        self.sent.append(meeting)


@pytest.fixture(autouse=True)
def _safe_test_config(monkeypatch):
    """Force deterministic, offline-safe config for tests.

    The repo loads .env on import; these overrides prevent real email API
    calls and keep admin endpoints open unless a test opts in.
    """
    from app.config import config, Config
    from app import scheduler

    monkeypatch.setattr(Config, "EMAIL_API_URL", "", raising=False)
    monkeypatch.setattr(Config, "EMAIL_API_KEY", "", raising=False)
    monkeypatch.setattr(Config, "API_KEY", "", raising=False)
    monkeypatch.setattr(Config, "BUSINESS_TIMEZONE", "", raising=False)
    monkeypatch.setattr(Config, "SLOT_HORIZON_DAYS", 90, raising=False)

    # Keep the instance in sync for any code that reads instance attributes directly.
    monkeypatch.setattr(config, "EMAIL_API_URL", "", raising=False)
    monkeypatch.setattr(config, "EMAIL_API_KEY", "", raising=False)
    monkeypatch.setattr(config, "API_KEY", "", raising=False)
    monkeypatch.setattr(config, "BUSINESS_TIMEZONE", "", raising=False)
    monkeypatch.setattr(config, "SLOT_HORIZON_DAYS", 90, raising=False)

    scheduler.reset_engine()
    yield config
    scheduler.reset_engine()


@pytest.fixture
def clock():
    return MutableClock()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def engine(clock, notifier):
    from app.scheduler import SchedulingEngine

    engine = SchedulingEngine(clock=clock, notifier=notifier)
    engine.initialize(90)
    return engine


@pytest.fixture
def booking_payload():
    return {
        "firstName": "Test",
        "lastName": "User",
        "email": "test@example.com",
        "phone": "555-1234",
        "company": "Test Company",
        "message": "This is a test booking",
        "date": "2025-03-06",
        "time": "10:00 AM",
        "timezone": "America/New_York",
    }


@pytest.fixture
def client(engine):
    """TestClient wired to the fixed-clock engine."""
    from fastapi.testclient import TestClient
    from app.main import app
    from app.scheduler import get_engine

    app.dependency_overrides[get_engine] = lambda: engine
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_engine, None)
