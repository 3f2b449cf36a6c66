"""Coordinación de consultas en vuelo.

Este módulo es la única superficie que ve la capa de presentación:
`run(query)`, `load_more()`, `subscribe(listener)` y `abandon()`.

Cada petición emitida captura el número de generación vigente; al resolverse
solo se aplica si esa generación sigue siendo la actual (gana la última
consulta, no la última respuesta). La cancelación es cooperativa: la respuesta
obsoleta se descarta al llegar.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from adapters.nasa_sources import DailyPictureAdapter, NeoFeedAdapter, RoverImageryAdapter
from core.config import AppSettings
from core.domain.models import AggregateResult, FeedSummary, HazardLevel
from core.domain.queries import (
    NeoById,
    NeoByRange,
    PictureRange,
    Query,
    RoverPhotos,
    SinglePicture,
)
from core.errors import AstroExplorerError, InvalidQueryError
from core.interfaces.transport import Transport
from core.services.feed_aggregator import aggregate_feed
from core.services.hazard import classify_all
from core.services.pagination import PaginationAccumulator

logger = logging.getLogger(__name__)

Listener = Callable[[AggregateResult[Any]], None]


@dataclass
class ResourceAdapters:
    """Adaptadores disponibles para el coordinador."""

    pictures: DailyPictureAdapter
    rovers: RoverImageryAdapter
    neos: NeoFeedAdapter

    @classmethod
    def from_transport(cls, transport: Transport, settings: AppSettings | None = None) -> "ResourceAdapters":
        settings = settings or AppSettings()
        return cls(
            pictures=DailyPictureAdapter(transport),
            rovers=RoverImageryAdapter(transport),
            neos=NeoFeedAdapter(transport, max_range_days=settings.neo_feed_max_days),
        )


@dataclass
class _Outcome:
    items: list[Any]
    summary: FeedSummary | None = None
    hazards: dict[str, HazardLevel] = field(default_factory=dict)


class RequestCoordinator:
    """Supervisa una consulta lógica activa y su `AggregateResult`."""

    def __init__(self, adapters: ResourceAdapters, *, rover_page_size: int = 25) -> None:
        self._adapters = adapters
        self._rover_page_size = rover_page_size
        self._generation = 0
        self._query: Query | None = None
        self._identity: tuple[object, ...] | None = None
        self._result: AggregateResult[Any] = AggregateResult()
        self._pager: PaginationAccumulator[Any] | None = None
        self._listeners: list[Listener] = []

    @classmethod
    def from_transport(cls, transport: Transport, settings: AppSettings | None = None) -> "RequestCoordinator":
        settings = settings or AppSettings()
        return cls(
            ResourceAdapters.from_transport(transport, settings),
            rover_page_size=settings.rover_page_size,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def result(self) -> AggregateResult[Any]:
        return self._result.snapshot()

    @property
    def active_query(self) -> Query | None:
        return self._query

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Registra un listener; devuelve la función para desuscribirlo."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def run(self, query: Query) -> AggregateResult[Any]:
        if isinstance(query, RoverPhotos):
            try:
                # Valida la consulta completa, cursor incluido, antes de tocar la red.
                self._adapters.rovers.build_request(query)
            except InvalidQueryError as exc:
                return self._reject(query, exc)
            if self._continues_pagination(query):
                return await self.load_more()

        identity = query.identity
        self._generation += 1
        generation = self._generation

        if identity != self._identity or isinstance(query, RoverPhotos):
            self._result = AggregateResult()
        self._query = query
        self._identity = identity

        if isinstance(query, RoverPhotos):
            self._pager = PaginationAccumulator(page_size=self._rover_page_size)
            self._result.items = self._pager.items
            self._result.has_more = self._pager.has_more
            return await self._fetch_next_page(query, self._pager, generation)

        self._pager = None
        self._mark_loading()
        try:
            outcome = await self._dispatch(query)
        except asyncio.CancelledError:
            if not self._is_stale(generation):
                self._result.is_loading = False
                self._notify()
            raise
        except AstroExplorerError as exc:
            if self._is_stale(generation):
                logger.debug("Discarding stale failure for %s: %s", query.kind, exc)
                return self.result
            self._result.is_loading = False
            self._result.last_error = exc
            self._notify()
            return self.result

        if self._is_stale(generation):
            logger.debug("Discarding stale response for %s", query.kind)
            return self.result

        self._result.items = outcome.items
        self._result.summary = outcome.summary
        self._result.hazards = outcome.hazards
        self._result.is_loading = False
        self._result.last_error = None
        self._notify()
        return self.result

    async def load_more(self) -> AggregateResult[Any]:
        query = self._query
        pager = self._pager
        if pager is None or not isinstance(query, RoverPhotos):
            return self.result
        return await self._fetch_next_page(query, pager, self._generation)

    def abandon(self) -> None:
        """Descarta la consulta activa; las respuestas en vuelo se ignorarán."""

        self._generation += 1
        self._query = None
        self._identity = None
        self._pager = None
        self._result = AggregateResult()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _reject(self, query: Query, error: InvalidQueryError) -> AggregateResult[Any]:
        """Una consulta inválida reemplaza a la activa y queda como `last_error`."""

        self._generation += 1
        self._query = query
        self._identity = query.identity
        self._pager = None
        self._result = AggregateResult(last_error=error)
        self._notify()
        return self.result

    def _continues_pagination(self, query: RoverPhotos) -> bool:
        pager = self._pager
        return (
            pager is not None
            and query.identity == self._identity
            and query.page > 1
            and query.page == pager.next_page
        )

    async def _fetch_next_page(
        self,
        query: RoverPhotos,
        pager: PaginationAccumulator[Any],
        generation: int,
    ) -> AggregateResult[Any]:
        page = pager.begin()
        if page is None:
            return self.result

        self._mark_loading()
        try:
            batch = await self._adapters.rovers.fetch_page(query, page)
        except asyncio.CancelledError:
            if not self._is_stale(generation):
                logger.debug("Rover page %s cancelled; it can be requested again", page)
                pager.cancel(page)
                self._result.is_loading = False
                self._result.has_more = pager.has_more
                self._notify()
            raise
        except AstroExplorerError as exc:
            if self._is_stale(generation):
                logger.debug("Discarding stale failure for rover page %s: %s", page, exc)
                return self.result
            pager.fail(page, exc)
            self._result.is_loading = False
            self._result.last_error = exc
            self._result.has_more = pager.has_more
            self._notify()
            return self.result

        if self._is_stale(generation):
            logger.debug("Discarding stale rover page %s", page)
            return self.result

        pager.complete(page, batch)
        logger.debug("Rover page %s appended %s photos (state=%s)", page, len(batch), pager.state.value)
        self._result.is_loading = False
        self._result.last_error = None
        self._result.has_more = pager.has_more
        self._notify()
        return self.result

    async def _dispatch(self, query: Query) -> _Outcome:
        if isinstance(query, SinglePicture):
            record = await self._adapters.pictures.fetch_single(query)
            return _Outcome(items=[record])
        if isinstance(query, PictureRange):
            records = await self._adapters.pictures.fetch_range(query)
            return _Outcome(items=sorted(records, key=lambda record: record.date, reverse=True))
        if isinstance(query, NeoByRange):
            buckets = await self._adapters.neos.fetch_feed(query)
            aggregate = aggregate_feed(buckets)
            return _Outcome(
                items=aggregate.items,
                summary=aggregate.summary,
                hazards=classify_all(aggregate.items),
            )
        if isinstance(query, NeoById):
            record = await self._adapters.neos.fetch_by_id(query)
            return _Outcome(items=[record], hazards=classify_all([record]))
        raise TypeError(f"unsupported query type: {type(query).__name__}")

    def _mark_loading(self) -> None:
        self._result.is_loading = True
        self._result.last_error = None
        self._notify()

    def _is_stale(self, generation: int) -> bool:
        return generation != self._generation

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self._result.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)
