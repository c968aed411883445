"""Rotas HTTP da API: adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (webhook de pagamento, bookings, providers, health)
- Validação inicial de request (headers, query params, corpo)
- Delegação para connectors/use_cases
- Mapeamento de erros de domínio para respostas HTTP

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
