"""Recurso: objetos cercanos a la Tierra.

- Feed por rango de fechas: la respuesta viene agrupada por día.
- Lookup de un objeto por id.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Any
from urllib.parse import quote

from pydantic import BaseModel, TypeAdapter

from adapters.nasa_sources.decoding import decode
from adapters.nasa_sources.params import coerce_range
from core.domain.models import NearEarthObjectRecord
from core.domain.queries import NeoById, NeoByRange
from core.errors import InvalidQueryError
from core.interfaces.transport import Transport

logger = logging.getLogger(__name__)

NEO_FEED_PATH = "/neo/rest/v1/feed"
NEO_LOOKUP_PATH = "/neo/rest/v1/neo/{neo_id}"


class NeoFeedAdapter:
    """Feed por rango y lookup por id."""

    def __init__(self, transport: Transport, *, max_range_days: int | None = 7) -> None:
        self._transport = transport
        self._max_range_days = max_range_days

    def feed_params(self, query: NeoByRange) -> dict[str, Any]:
        start, end = coerce_range(query.start, query.end, max_days=self._max_range_days)
        return {"start_date": start.isoformat(), "end_date": end.isoformat()}

    def lookup_path(self, query: NeoById) -> str:
        neo_id = str(query.neo_id or "").strip()
        if not neo_id:
            raise InvalidQueryError("neo_id is required")
        return NEO_LOOKUP_PATH.format(neo_id=quote(neo_id, safe=""))

    async def fetch_feed(self, query: NeoByRange) -> dict[dt.date, list[NearEarthObjectRecord]]:
        params = self.feed_params(query)
        payload = await self._transport.send(NEO_FEED_PATH, params)
        return decode_feed(payload)

    async def fetch_by_id(self, query: NeoById) -> NearEarthObjectRecord:
        path = self.lookup_path(query)
        payload = await self._transport.send(path, None)
        return decode_neo(payload)


class _FeedPayload(BaseModel):
    element_count: Any = None
    near_earth_objects: dict[str, list[Any]]


_FEED = TypeAdapter(_FeedPayload)
_DAY = TypeAdapter(dt.date)
_NEO = TypeAdapter(NearEarthObjectRecord)
_NEOS = TypeAdapter(list[NearEarthObjectRecord])


def decode_feed(payload: Any) -> dict[dt.date, list[NearEarthObjectRecord]]:
    feed = decode(_FEED, payload)
    out: dict[dt.date, list[NearEarthObjectRecord]] = {}
    decoded = 0
    for key, items in feed.near_earth_objects.items():
        where = f"near_earth_objects.{key}"
        day = decode(_DAY, key.strip(), where=where)
        records = decode(_NEOS, items, where=where)
        # Dos claves pueden normalizar al mismo día; se concatenan.
        out.setdefault(day, []).extend(records)
        decoded += len(records)

    if isinstance(feed.element_count, int) and feed.element_count != decoded:
        logger.warning("NEO feed element_count=%s but %s records were decoded", feed.element_count, decoded)
    return out


def decode_neo(payload: Any) -> NearEarthObjectRecord:
    return decode(_NEO, payload)
