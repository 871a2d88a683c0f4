"""API — camada de borda HTTP.

Responsabilidades:
- Receber requests da interface de agendamento
- Validar formato dos payloads (pydantic)
- Delegar ao workflow e aos serviços de app/services
- Traduzir exceções do núcleo em respostas HTTP

NÃO PODE conter: FSM, regras de negócio, chamadas diretas à API de citas.
"""
