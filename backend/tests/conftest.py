import os
import sys
from pathlib import Path

import pytest
import sentry_sdk
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Disable outbound Sentry calls during tests
sentry_sdk.init = lambda *args, **kwargs: None  # type: ignore[assignment]
os.environ["SENTRY_DSN"] = ""
os.environ.pop("GOOGLE_MAPS_API_KEY", None)
os.environ.pop("OPENAI_API_KEY", None)

from backend.cabshare.contracts import RideRecord  # noqa: E402
from backend.cabshare.main import app  # noqa: E402
from backend.cabshare.ranking import route_key  # noqa: E402
from backend.cabshare.settings import settings  # noqa: E402
from backend.cabshare.storage import DB, FEEDBACK  # noqa: E402


@pytest.fixture(scope="session")
def client() -> TestClient:
    return TestClient(app, base_url="http://api.testserver")


@pytest.fixture(autouse=True)
def clean_state() -> None:
    settings.GOOGLE_MAPS_API_KEY = None
    settings.OPENAI_API_KEY = None
    settings.SENTRY_DSN = None
    DB.clear()
    FEEDBACK.clear()
    yield
    DB.clear()
    FEEDBACK.clear()


def make_ride(**overrides) -> RideRecord:
    base = dict(
        id="ride-1",
        requester_name="Asha",
        phone="+91 98765 43210",
        pickup_text="SD Hall",
        drop_text="Rourkela Railway Station",
        datetime_iso="2026-10-18T09:30:00",
        seats=3,
        notes=None,
    )
    base.update(overrides)
    base.setdefault("route_key", route_key(base["pickup_text"], base["drop_text"]))
    return RideRecord(**base)


@pytest.fixture
def ride_factory():
    return make_ride
