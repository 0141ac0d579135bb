"""Rotas HTTP da API — adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (eventos do bridge, poll store, health)
- Validação inicial de request
- Delegação para o EventRouter via container
- Respostas HTTP apropriadas

Estrutura:
- routes/events/: ingestão de eventos brutos + tasks de processamento
- routes/polls/: registro de enquetes enviadas
- routes/health/: health checks e readiness

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
