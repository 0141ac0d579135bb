"""App — coração do sistema: pipeline de eventos e infraestrutura.

Subpastas:
- bootstrap/: composition root (container, inicialização, wiring)
- domain/: eventos brutos, JIDs, payloads de saída, enquetes
- services/: identidade, votos, debounce, classificação, roteamento
- payload_builders/: evento classificado → payload tipado
- infra/: implementações concretas de IO (bridge, store, webhook, crypto)
- protocols/: contratos/interfaces
- observability/: contexto de log por evento

Padrão: app executa; api adapta; utils apoia.
"""
