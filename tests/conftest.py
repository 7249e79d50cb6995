from __future__ import annotations

from pathlib import Path
from typing import Iterable

import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest
from fastapi.testclient import TestClient

from almanac.location import Location


@pytest.fixture(scope="session")
def api_client() -> Iterable[TestClient]:
    from almanac_api import app

    with TestClient(app) as client:
        yield client


@pytest.fixture
def london() -> Location:
    return Location(51.4769, 0.0, elevation=0.0, zone=0.0)


@pytest.fixture
def svalbard() -> Location:
    return Location.from_hours(78.2232, 15.6469, elevation=0.0, zone_hours=1.0)


@pytest.fixture
def equator() -> Location:
    return Location(0.0, 0.0)
