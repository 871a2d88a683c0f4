"""Settings de integração com a API de citas.

Lidos uma vez pelo composition root e injetados nos componentes; nenhum
serviço do núcleo lê variáveis de ambiente diretamente.
"""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_BOOKING_API_BASE_URL = "http://localhost:5000/api/v1"
CANCELLATION_HOURS_SETTING_KEY = "APPOINTMENT_CANCELLATION_HOURS"


class BookingApiSettings(BaseModel):
    """Configurações da API de citas e do artefato de verificação."""

    model_config = ConfigDict(extra="ignore")

    base_url: str = Field(
        default=DEFAULT_BOOKING_API_BASE_URL,
        description="URL base da API de citas (inclui /api/v1).",
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout das chamadas HTTP em segundos.",
    )
    verification_base_url: str = Field(
        default="http://localhost:3000",
        description="Site público que resolve o link de verificação.",
    )
    cancellation_setting_key: str = Field(
        default=CANCELLATION_HOURS_SETTING_KEY,
        description="Chave do setting com a antecedência mínima de cancelamento.",
    )
    default_cancellation_hours: int = Field(
        default=24,
        ge=0,
        description="Antecedência usada quando o setting está ausente ou ilegível.",
    )
    qr_width: int = Field(
        default=300,
        ge=64,
        description="Largura em pixels do QR de verificação.",
    )

    def validate_urls(self) -> list[str]:
        """Valida esquemas das URLs configuradas."""
        errors: list[str] = []
        for name, value in (
            ("BOOKING_API_BASE_URL", self.base_url),
            ("VERIFICATION_BASE_URL", self.verification_base_url),
        ):
            if not value.startswith(("http://", "https://")):
                errors.append(f"{name} deve começar com http:// ou https://")
        return errors


def _read_optional_env(key: str) -> str | None:
    """Retorna valor opcional da env sem propagar string vazia."""
    raw_value = os.getenv(key)
    if raw_value is None:
        return None
    stripped_value = raw_value.strip()
    return stripped_value or None


def _load_booking_api_from_env() -> BookingApiSettings:
    """Carrega BookingApiSettings a partir de variáveis de ambiente."""
    return BookingApiSettings(
        base_url=(_read_optional_env("BOOKING_API_BASE_URL") or DEFAULT_BOOKING_API_BASE_URL).rstrip("/"),
        timeout_seconds=float(os.getenv("BOOKING_API_TIMEOUT_SECONDS", "30")),
        verification_base_url=(
            _read_optional_env("VERIFICATION_BASE_URL") or "http://localhost:3000"
        ).rstrip("/"),
        cancellation_setting_key=os.getenv(
            "CANCELLATION_HOURS_SETTING_KEY", CANCELLATION_HOURS_SETTING_KEY
        ),
        default_cancellation_hours=int(os.getenv("DEFAULT_CANCELLATION_HOURS", "24")),
        qr_width=int(os.getenv("VERIFICATION_QR_WIDTH", "300")),
    )


@lru_cache(maxsize=1)
def get_booking_api_settings() -> BookingApiSettings:
    """Retorna instância cacheada de BookingApiSettings."""
    return _load_booking_api_from_env()


__all__ = [
    "CANCELLATION_HOURS_SETTING_KEY",
    "BookingApiSettings",
    "get_booking_api_settings",
]
