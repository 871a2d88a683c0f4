"""Rotas HTTP da API — adapters finos sobre o núcleo de agendamento.

Estrutura:
- routes/booking/: sessões de agendamento (workflow por sessão)
- routes/appointments/: consulta, cancelamento, conclusão e verificação
- routes/health/: liveness
- routes/errors.py: mapeamento de exceções do núcleo para HTTP

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
