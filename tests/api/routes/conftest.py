"""Fixtures das rotas HTTP (FastAPI TestClient sobre a API fake)."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from app.app import create_app
from app.infra.stores.memory_stores import MemoryWorkflowStore
from app.services.verification_artifact import VerificationArtifactBuilder
from tests.fakes.fake_booking_api import FakeBookingApi


@pytest.fixture
def client(fake_api: FakeBookingApi) -> Iterator[TestClient]:
    app = create_app(
        booking_api=fake_api,
        workflow_store=MemoryWorkflowStore(),
        artifact_builder=VerificationArtifactBuilder("https://citas.example.org"),
    )
    with TestClient(app) as test_client:
        yield test_client
