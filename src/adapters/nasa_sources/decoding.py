"""Validación del JSON remoto contra los modelos del dominio.

Los modelos declaran la forma del payload (alias y rutas); aquí solo se traduce
`ValidationError` a `DecodeError(field)` con la ruta punteada del primer error
(p.ej. `photos[3].camera.name`). Un campo requerido ausente nunca se rellena
con un valor por defecto.
"""

from __future__ import annotations

from typing import Any, Iterable, TypeVar

from pydantic import TypeAdapter, ValidationError

from core.errors import DecodeError

T = TypeVar("T")


def field_path(where: str, loc: Iterable[Any]) -> str:
    """Une un prefijo y un `loc` de pydantic: `("photos", 3, "id")` -> `photos[3].id`."""

    path = where
    for part in loc:
        if isinstance(part, int):
            path = f"{path}[{part}]"
        elif path:
            path = f"{path}.{part}"
        else:
            path = str(part)
    return path or "$"


def decode(adapter: TypeAdapter[T], payload: Any, *, where: str = "") -> T:
    """Valida `payload` y traduce el primer error de pydantic a `DecodeError`."""

    try:
        return adapter.validate_python(payload)
    except ValidationError as exc:
        first = exc.errors()[0]
        raise DecodeError(field_path(where, first.get("loc", ())), first.get("msg", "invalid value")) from exc
