from typing import List

import pytest

from src.app.services.transport.models import Route, Stop


@pytest.fixture
def sample_routes() -> List[Route]:
    return [
        Route(stops=(Stop("A", "B", "X", 5, 10, 50, 15),)),
        Route(stops=(Stop("A", "C", "Y", 2, 4, 8, 6),)),
    ]


@pytest.fixture
def sample_payload() -> list:
    return [
        {"stops": [{"from_store": "A", "to_store": "B", "item": "X", "units": 5, "distance": 10, "cost": 50, "time": 15}]},
        {"stops": [{"from_store": "A", "to_store": "C", "item": "Y", "units": 2, "distance": 4, "cost": 8, "time": 6}]},
    ]
