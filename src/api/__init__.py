"""API — camada de borda.

Responsabilidades:
- Receber eventos brutos do bridge (HTTP)
- Validar payloads na entrada
- Expor o poll store e health checks

Subpastas:
- routes/: endpoints HTTP (eventos, enquetes, health)

NÃO PODE conter: classificação de eventos, builders, entrega de webhooks.
"""
