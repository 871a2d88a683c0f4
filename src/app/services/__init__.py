"""Serviços de aplicação.

Unidades de orquestração que dependem apenas de BookingApiProtocol.
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.appointment_availability import AvailabilityResolver, SlotResolution
from app.services.appointment_management import AppointmentManager, ManagementOutcome
from app.services.booking_workflow import BookingWorkflow
from app.services.cancellation_policy import CancellationPolicyGuard, read_lead_time_hours
from app.services.client_identity import ClientIdentityResolver, RegistrantForm
from app.services.verification_artifact import VerificationArtifactBuilder

__all__ = [
    "AppointmentManager",
    "AvailabilityResolver",
    "BookingWorkflow",
    "CancellationPolicyGuard",
    "ClientIdentityResolver",
    "ManagementOutcome",
    "RegistrantForm",
    "SlotResolution",
    "VerificationArtifactBuilder",
    "read_lead_time_hours",
]
