"""Recurso: imagen astronómica del día.

- Consulta simple (`date` opcional) o rango (`start_date`/`end_date`).
- Los videos nunca exponen `hd_url`; la URL del video queda en `url`.
"""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter

from adapters.nasa_sources.decoding import decode
from adapters.nasa_sources.params import coerce_date, coerce_range
from core.domain.models import DailyPictureRecord
from core.domain.queries import PictureRange, SinglePicture
from core.interfaces.transport import Transport

APOD_PATH = "/planetary/apod"

_PICTURE = TypeAdapter(DailyPictureRecord)
_PICTURES = TypeAdapter(list[DailyPictureRecord])


class DailyPictureAdapter:
    """Traduce consultas de imagen del día a llamadas y registros."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def single_params(self, query: SinglePicture) -> dict[str, Any]:
        params: dict[str, Any] = {"thumbs": "true"}
        if query.date is not None:
            params["date"] = coerce_date(query.date, field="date").isoformat()
        return params

    def range_params(self, query: PictureRange) -> dict[str, Any]:
        start, end = coerce_range(query.start, query.end)
        return {
            "start_date": start.isoformat(),
            "end_date": end.isoformat(),
            "thumbs": "true",
        }

    async def fetch_single(self, query: SinglePicture) -> DailyPictureRecord:
        params = self.single_params(query)
        payload = await self._transport.send(APOD_PATH, params)
        return decode_picture(payload)

    async def fetch_range(self, query: PictureRange) -> list[DailyPictureRecord]:
        params = self.range_params(query)
        payload = await self._transport.send(APOD_PATH, params)
        # Un rango de un solo día puede llegar como objeto suelto.
        if isinstance(payload, dict):
            return [decode_picture(payload)]
        return decode_pictures(payload)


def decode_picture(payload: Any) -> DailyPictureRecord:
    return decode(_PICTURE, payload)


def decode_pictures(payload: Any) -> list[DailyPictureRecord]:
    return decode(_PICTURES, payload)
