"""Consultas tipadas que la capa de presentación entrega al coordinador.

Cada consulta expone `identity`: la tupla que decide si dos peticiones son la
misma pregunta lógica. En `RoverPhotos` el cursor de página queda fuera, así
que avanzar de página continúa la misma consulta y cambiar cualquier otro
campo empieza una nueva.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import ClassVar, Union

DateInput = Union[dt.date, str]

NO_CAMERA_FILTER = "ALL"


def normalize_camera(camera: str | None) -> str | None:
    """Devuelve el código de cámara o `None` si el valor significa "sin filtro"."""

    if camera is None:
        return None
    code = str(camera).strip().upper()
    if not code or code == NO_CAMERA_FILTER:
        return None
    return code


def _date_key(value: DateInput | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, dt.date):
        return value.isoformat()
    return str(value).strip()


@dataclass(frozen=True)
class SinglePicture:
    date: DateInput | None = None

    kind: ClassVar[str] = "single_picture"

    @property
    def identity(self) -> tuple[object, ...]:
        return (self.kind, _date_key(self.date))


@dataclass(frozen=True)
class PictureRange:
    start: DateInput | None = None
    end: DateInput | None = None

    kind: ClassVar[str] = "picture_range"

    @property
    def identity(self) -> tuple[object, ...]:
        return (self.kind, _date_key(self.start), _date_key(self.end))


@dataclass(frozen=True)
class RoverPhotos:
    rover: str
    sol: int | None = None
    earth_date: DateInput | None = None
    camera: str | None = None
    page: int = 1

    kind: ClassVar[str] = "rover_photos"

    @property
    def identity(self) -> tuple[object, ...]:
        return (
            self.kind,
            str(self.rover or "").strip().lower(),
            self.sol,
            _date_key(self.earth_date),
            normalize_camera(self.camera),
        )


@dataclass(frozen=True)
class NeoByRange:
    start: DateInput | None = None
    end: DateInput | None = None

    kind: ClassVar[str] = "neo_by_range"

    @property
    def identity(self) -> tuple[object, ...]:
        return (self.kind, _date_key(self.start), _date_key(self.end))


@dataclass(frozen=True)
class NeoById:
    neo_id: str

    kind: ClassVar[str] = "neo_by_id"

    @property
    def identity(self) -> tuple[object, ...]:
        return (self.kind, str(self.neo_id or "").strip())


Query = Union[SinglePicture, PictureRange, RoverPhotos, NeoByRange, NeoById]
