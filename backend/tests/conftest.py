import random

import pytest
from fastapi.testclient import TestClient

from arena_engine.main import app


@pytest.fixture
def rng():
    """Seeded RNG so draws are reproducible"""
    return random.Random(1234)


@pytest.fixture(name="client")
def client_fixture():
    """Provide a test client. The API is stateless, so no overrides are needed."""
    with TestClient(app) as client:
        yield client
