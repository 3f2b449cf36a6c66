"""Recurso: fotos de rovers (paginado en bloques de tamaño fijo)."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from pydantic import BaseModel, TypeAdapter

from adapters.nasa_sources.decoding import decode
from adapters.nasa_sources.params import coerce_date
from core.domain.models import RoverImageRecord
from core.domain.queries import RoverPhotos, normalize_camera
from core.domain.rovers import get_rover
from core.errors import InvalidQueryError
from core.interfaces.transport import Transport

ROVER_PHOTOS_PATH = "/mars-photos/api/v1/rovers/{rover}/photos"


class RoverImageryAdapter:
    """Una llamada = una página de fotos para un rover y un día."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def build_request(self, query: RoverPhotos, page: int | None = None) -> tuple[str, dict[str, Any]]:
        """Devuelve `(path, params)` o falla con `InvalidQueryError`."""

        rover = get_rover(str(query.rover or ""))
        if rover is None:
            raise InvalidQueryError(f"unknown rover {query.rover!r}")

        has_sol = query.sol is not None
        has_earth_date = query.earth_date is not None
        if has_sol == has_earth_date:
            raise InvalidQueryError("exactly one of sol or earth_date is required")

        page = query.page if page is None else page
        if isinstance(page, bool) or not isinstance(page, int) or page < 1:
            raise InvalidQueryError(f"page must be an integer >= 1, got {page!r}")

        params: dict[str, Any] = {"page": page}
        if has_sol:
            if isinstance(query.sol, bool) or not isinstance(query.sol, int) or query.sol < 0:
                raise InvalidQueryError(f"sol must be an integer >= 0, got {query.sol!r}")
            params["sol"] = query.sol
        else:
            params["earth_date"] = coerce_date(query.earth_date, field="earth_date").isoformat()

        camera = normalize_camera(query.camera)
        if camera is not None:
            params["camera"] = camera

        path = ROVER_PHOTOS_PATH.format(rover=quote(rover.key, safe=""))
        return path, params

    async def fetch_page(self, query: RoverPhotos, page: int | None = None) -> list[RoverImageRecord]:
        path, params = self.build_request(query, page)
        payload = await self._transport.send(path, params)
        return decode_photos(payload)


class _PhotosPage(BaseModel):
    photos: list[RoverImageRecord]


_PAGE = TypeAdapter(_PhotosPage)


def decode_photos(payload: Any) -> list[RoverImageRecord]:
    return decode(_PAGE, payload).photos
