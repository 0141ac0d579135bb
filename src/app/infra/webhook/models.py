"""Resultados de entrega de webhook."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DeliveryOutcome:
    """Resultado de um POST para um destino."""

    endpoint: str
    succeeded: bool
    detail: str = ""
    status_code: int | None = None


@dataclass(frozen=True, slots=True)
class DispatchReport:
    """Agregado de um dispatch (um evento, N destinos)."""

    event_name: str
    outcomes: tuple[DeliveryOutcome, ...] = ()

    @property
    def succeeded(self) -> tuple[DeliveryOutcome, ...]:
        return tuple(o for o in self.outcomes if o.succeeded)

    @property
    def failed(self) -> tuple[DeliveryOutcome, ...]:
        return tuple(o for o in self.outcomes if not o.succeeded)

    @property
    def partial(self) -> bool:
        return bool(self.succeeded) and bool(self.failed)
