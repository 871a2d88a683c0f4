"""Artefato de verificação (QR) anexado à confirmação da cita.

O QR codifica um link público `/verificar-cita?numero=...&cliente=...`
que qualquer pessoa pode abrir para consultar a validade da cita.
Falhar ao gerar o artefato nunca invalida o agendamento.
"""

from __future__ import annotations

import base64
import io
import logging
from urllib.parse import quote

import qrcode
from PIL import Image

from app.domain.booking import VerificationArtifact
from config.logging import log_fallback

logger = logging.getLogger(__name__)

_COMPONENT = "verification_artifact"

DEFAULT_QR_WIDTH = 300


def build_verification_url(base_url: str, appointment_number: str, client_number: str) -> str:
    """Link público de verificação por referência."""
    return (
        f"{base_url.rstrip('/')}/verificar-cita"
        f"?numero={quote(appointment_number, safe='')}"
        f"&cliente={quote(client_number, safe='')}"
    )


def render_qr_data_url(data: str, width: int = DEFAULT_QR_WIDTH) -> str:
    """Renderiza `data` como QR PNG e retorna um data URL base64."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.ERROR_CORRECT_M,
        box_size=10,
        border=2,
    )
    qr.add_data(data)
    qr.make(fit=True)

    image = qr.make_image(fill_color="black", back_color="white").get_image()
    if image.width != width:
        image = image.resize((width, width), Image.Resampling.NEAREST)

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    encoded = base64.b64encode(buffer.getvalue()).decode()
    return f"data:image/png;base64,{encoded}"


class VerificationArtifactBuilder:
    """Gera o artefato; devolve None em qualquer falha (não fatal)."""

    __slots__ = ("_base_url", "_width")

    def __init__(self, base_url: str, width: int = DEFAULT_QR_WIDTH) -> None:
        self._base_url = base_url
        self._width = width

    def build(self, appointment_number: str, client_number: str) -> VerificationArtifact | None:
        try:
            url = build_verification_url(self._base_url, appointment_number, client_number)
            return VerificationArtifact(
                verification_url=url,
                image_data_url=render_qr_data_url(url, self._width),
            )
        except Exception:
            logger.warning(
                "verification_artifact_failed",
                extra={"component": _COMPONENT, "action": "build", "result": "error"},
                exc_info=True,
            )
            log_fallback(logger, _COMPONENT, reason="artifact_omitted")
            return None


__all__ = [
    "DEFAULT_QR_WIDTH",
    "VerificationArtifactBuilder",
    "build_verification_url",
    "render_qr_data_url",
]
