import pytest
from fastapi.testclient import TestClient

from agora.main import app
from agora.modules.markup import MarkupService


@pytest.fixture
def markup() -> MarkupService:
    return MarkupService()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)
