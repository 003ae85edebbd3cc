"""
Shared fixtures.

The app is configured through environment variables before it is imported:
a file-backed SQLite database (lookups run in worker threads, each with its own
connection) and the in-memory response cache.
"""
import os
import tempfile
import uuid
from datetime import date
from decimal import Decimal

_DB_DIR = tempfile.mkdtemp(prefix="salon-booking-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["CACHE_BACKEND"] = "memory"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.api.dependencies import get_response_cache  # noqa: E402
from app.config.database import SessionLocal, engine  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Base, HomeService, Salon, Service  # noqa: E402
from app.services.cache.response_cache import InMemoryResponseCache  # noqa: E402
from app.services.schedule.working_hours_service import WorkingHoursService  # noqa: E402

# Monday: open 09:00-18:00 with a 13:00-14:00 break in the default week
MONDAY = date(2024, 6, 10)
# Friday: closed in the default week
FRIDAY = date(2024, 6, 14)


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def cache():
    return InMemoryResponseCache(ttl_seconds=60)


@pytest.fixture
def client(cache):
    app.dependency_overrides[get_response_cache] = lambda: cache
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def salon(db):
    salon = Salon(id=uuid.uuid4(), name="Layla Beauty", phone_number="+966500000000", is_active=True)
    db.add(salon)
    db.commit()
    WorkingHoursService.reset_working_hours(db, salon.id)
    return salon


@pytest.fixture
def service(db, salon):
    service = Service(
        id=uuid.uuid4(),
        salon_id=salon.id,
        name="Haircut",
        price=Decimal("50.00"),
        duration_minutes=30,
        is_active=True,
    )
    db.add(service)
    db.commit()
    return service


@pytest.fixture
def home_service(db, salon):
    home_service = HomeService(
        id=uuid.uuid4(),
        salon_id=salon.id,
        name="Bridal makeup",
        category="makeup",
        price=Decimal("300.00"),
        duration_minutes=60,
        is_active=True,
    )
    db.add(home_service)
    db.commit()
    return home_service


@pytest.fixture
def owner_url(salon):
    return f"/api/v1/owner/salons/{salon.id}"


@pytest.fixture
def public_url(salon):
    return f"/api/v1/public/salons/{salon.id}"
