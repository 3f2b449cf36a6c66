"""Aplanado y orden del feed de NEOs agrupado por día.

La agregación es pura y total: nunca falla sobre registros bien formados y una
entrada vacía produce una secuencia vacía con conteos en cero.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from core.domain.models import FeedSummary, NearEarthObjectRecord


@dataclass
class FeedAggregate:
    """Secuencia ordenada más los conteos resumen."""

    items: list[NearEarthObjectRecord] = field(default_factory=list)
    summary: FeedSummary = field(default_factory=FeedSummary)


def dedupe_objects(records: Iterable[NearEarthObjectRecord]) -> list[NearEarthObjectRecord]:
    """Remove duplicated objects keeping the first occurrence."""

    seen: set[str] = set()
    deduped: list[NearEarthObjectRecord] = []
    for record in records:
        if record.id in seen:
            continue
        seen.add(record.id)
        deduped.append(record)
    return deduped


def _approach_sort_key(record: NearEarthObjectRecord) -> tuple[int, dt.date]:
    earliest = record.earliest_approach_date
    if earliest is None:
        return (1, dt.date.max)
    return (0, earliest)


def aggregate_feed(buckets: Mapping[dt.date, Iterable[NearEarthObjectRecord]]) -> FeedAggregate:
    """Aplana `{fecha: [registros]}` en una sola secuencia.

    - Orden ascendente por la aproximación *más temprana* de cada registro.
    - Registros sin aproximaciones van al final.
    - Empates: orden de inserción, recorriendo las fechas de forma ascendente.
    - Un mismo objeto listado en varios días aparece una sola vez.
    """

    days = sorted(buckets)
    flattened: list[NearEarthObjectRecord] = []
    for day in days:
        flattened.extend(buckets[day])

    # sorted() es estable: los empates conservan el orden de inserción.
    items = sorted(dedupe_objects(flattened), key=_approach_sort_key)

    summary = FeedSummary(
        total_count=len(items),
        hazardous_count=sum(1 for record in items if record.is_potentially_hazardous),
        sentry_count=sum(1 for record in items if record.is_sentry_object),
        dates=tuple(days),
    )
    return FeedAggregate(items=items, summary=summary)
