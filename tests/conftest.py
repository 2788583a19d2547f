"""
Shared fixtures: an app wired to deterministic provider fakes.
"""

import pytest
from fastapi.testclient import TestClient

from roof_estimator.core.config import Settings
from roof_estimator.main import create_app
from tests.fakes import FakeGeocoder, FakeRoofInsights


@pytest.fixture
def settings():
    return Settings(GOOGLE_MAPS_KEY="test-key", PROMETHEUS_ENABLED=False)


@pytest.fixture
def geocoder():
    return FakeGeocoder()


@pytest.fixture
def roof_insights():
    return FakeRoofInsights()


@pytest.fixture
def client(settings, geocoder, roof_insights):
    app = create_app(settings, geocoder=geocoder, roof_insights=roof_insights)
    with TestClient(app) as c:
        yield c
