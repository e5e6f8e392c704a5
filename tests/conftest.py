import json

import pytest
from fastapi.testclient import TestClient

from nurse_roster.config import Settings
from nurse_roster.main import create_app
from nurse_roster.schemas.roster_schema import DAY_ORDER, SHIFT_ORDER
from nurse_roster.services.graph_service import GraphService


def empty_schedule_dict():
    return {day.value: {shift.value: [] for shift in SHIFT_ORDER} for day in DAY_ORDER}


class FakeTransport:
    """외부 생성 서비스 대신 정해진 응답을 돌려준다."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    async def complete(self, system, prompt):
        self.calls.append({"system": system, "prompt": prompt})
        if self.error is not None:
            raise self.error
        if isinstance(self.response, dict):
            return json.dumps(self.response)
        return self.response


@pytest.fixture
def settings():
    return Settings(google_api_key="test-key")


@pytest.fixture
def transport():
    return FakeTransport(response=empty_schedule_dict())


@pytest.fixture
def graph_service(transport):
    return GraphService(transport)


@pytest.fixture
def client(settings, graph_service):
    app = create_app(settings=settings, client=graph_service)
    with TestClient(app) as test_client:
        yield test_client
