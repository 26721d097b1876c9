from datetime import date

import pytest
from fastapi.testclient import TestClient

from macrolog.deps import current_date
from macrolog.main import create_app

TODAY = date(2025, 3, 10)


@pytest.fixture
def client():
    app = create_app()
    app.dependency_overrides[current_date] = lambda: TODAY
    with TestClient(app) as c:
        yield c
