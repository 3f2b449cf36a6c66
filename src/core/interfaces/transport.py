"""Contrato del transporte HTTP.

Los adaptadores de recursos solo conocen este Protocol; en tests se sustituye
por un transporte guionado sin red.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable


@runtime_checkable
class Transport(Protocol):
    """Una llamada lógica = un GET con la credencial adjunta.

    Reglas:
    - `send` es asíncrono: es el único punto de suspensión del motor.
    - Falla con `TransportError` ante status no-2xx o cuerpo no-JSON.
    """

    async def send(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        """Ejecuta la llamada y devuelve el JSON decodificado."""

        ...
