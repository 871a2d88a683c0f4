"""Configuração do pytest para o serviço de agendamento."""

import sys
from datetime import date
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from app.services.booking_workflow import BookingWorkflow  # noqa: E402
from app.services.verification_artifact import VerificationArtifactBuilder  # noqa: E402
from tests.fakes.fake_booking_api import FakeBookingApi  # noqa: E402

# Quinta-feira; "amanhã" (default do fluxo) cai numa sexta
TODAY = date(2026, 3, 12)


@pytest.fixture
def fake_api() -> FakeBookingApi:
    return FakeBookingApi()


@pytest.fixture
def artifact_builder() -> VerificationArtifactBuilder:
    return VerificationArtifactBuilder("https://citas.example.org")


@pytest.fixture
def workflow(fake_api: FakeBookingApi, artifact_builder: VerificationArtifactBuilder) -> BookingWorkflow:
    return BookingWorkflow(
        fake_api,
        artifact_builder,
        booking_id="bk-test",
        today=lambda: TODAY,
    )
