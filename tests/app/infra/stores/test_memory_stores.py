"""Testes do store de workflows em memória."""

from __future__ import annotations

import pytest

from app.infra.stores.memory_stores import MemoryWorkflowStore
from app.services.booking_workflow import BookingWorkflow
from tests.fakes.fake_booking_api import FakeBookingApi


class _Clock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> _Clock:
    return _Clock()


def _workflow(fake_api: FakeBookingApi, artifact_builder, booking_id: str) -> BookingWorkflow:
    return BookingWorkflow(fake_api, artifact_builder, booking_id=booking_id)


class TestMemoryWorkflowStore:
    """Testes do MemoryWorkflowStore."""

    def test_save_and_load(self, fake_api, artifact_builder, clock) -> None:
        """Deve devolver a mesma instância salva."""
        store = MemoryWorkflowStore(clock=clock)
        workflow = _workflow(fake_api, artifact_builder, "bk-1")

        store.save("s-1", workflow)

        assert store.load("s-1") is workflow
        assert store.load("s-2") is None

    def test_expired_session_is_gone(self, fake_api, artifact_builder, clock) -> None:
        """Deve expirar a sessão após o TTL."""
        store = MemoryWorkflowStore(clock=clock)
        store.save("s-1", _workflow(fake_api, artifact_builder, "bk-1"), ttl_seconds=60)

        clock.now += 59
        assert store.load("s-1") is not None

        clock.now += 1
        assert store.load("s-1") is None
        assert len(store) == 0

    def test_save_renews_ttl(self, fake_api, artifact_builder, clock) -> None:
        store = MemoryWorkflowStore(clock=clock)
        workflow = _workflow(fake_api, artifact_builder, "bk-1")
        store.save("s-1", workflow, ttl_seconds=60)

        clock.now += 50
        store.save("s-1", workflow, ttl_seconds=60)
        clock.now += 50

        assert store.load("s-1") is workflow

    def test_delete(self, fake_api, artifact_builder, clock) -> None:
        """Deve remover a sessão uma única vez."""
        store = MemoryWorkflowStore(clock=clock)
        store.save("s-1", _workflow(fake_api, artifact_builder, "bk-1"))

        assert store.delete("s-1") is True
        assert store.delete("s-1") is False

    def test_evicts_closest_to_expiry_when_full(self, fake_api, artifact_builder, clock) -> None:
        """Deve descartar a sessão mais próxima de expirar quando cheio."""
        store = MemoryWorkflowStore(max_sessions=2, clock=clock)
        store.save("short", _workflow(fake_api, artifact_builder, "bk-1"), ttl_seconds=10)
        store.save("long", _workflow(fake_api, artifact_builder, "bk-2"), ttl_seconds=100)

        store.save("new", _workflow(fake_api, artifact_builder, "bk-3"))

        assert store.load("short") is None
        assert store.load("long") is not None
        assert store.load("new") is not None
        assert len(store) == 2
