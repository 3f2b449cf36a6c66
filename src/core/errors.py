"""Taxonomía de errores del motor.

Tres familias, todas visibles para quien consume el coordinador como
`last_error`:
- `InvalidQueryError`: la consulta está incompleta; no se hizo ninguna llamada.
- `TransportError`: fallo de red, status no-2xx o cuerpo que no es JSON.
- `DecodeError`: la respuesta no tiene la forma esperada del registro.
"""

from __future__ import annotations


class AstroExplorerError(Exception):
    """Base de los errores de dominio."""


class InvalidQueryError(AstroExplorerError):
    """Raised before any network call when a query is underspecified."""


class TransportError(AstroExplorerError):
    """Raised when the remote service cannot be reached or answers badly."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"HTTP {self.status_code}: {self.message}"


class DecodeError(AstroExplorerError):
    """Raised when a response body does not match the expected record shape."""

    def __init__(self, field: str, message: str = "missing or malformed field") -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message
