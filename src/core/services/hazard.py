"""Clasificación heurística de riesgo para NEOs.

Reglas (compatibilidad con la interfaz previa, no es física):
- `high` si el servicio marca el objeto como potencialmente peligroso.
- `medium` si la *primera* aproximación tiene distancia < 1.000.000 km y
  velocidad relativa > 50.000 km/h.
- `low` en cualquier otro caso, incluido "sin aproximaciones".
"""

from __future__ import annotations

from typing import Iterable

from core.domain.models import HazardLevel, NearEarthObjectRecord

MEDIUM_MAX_MISS_DISTANCE_KM = 1_000_000.0
MEDIUM_MIN_VELOCITY_KMH = 50_000.0


def classify(record: NearEarthObjectRecord) -> HazardLevel:
    if record.is_potentially_hazardous:
        return HazardLevel.HIGH

    approach = record.first_approach
    if approach is None:
        return HazardLevel.LOW

    if (
        approach.miss_distance_km < MEDIUM_MAX_MISS_DISTANCE_KM
        and approach.relative_velocity_kmh > MEDIUM_MIN_VELOCITY_KMH
    ):
        return HazardLevel.MEDIUM
    return HazardLevel.LOW


def classify_all(records: Iterable[NearEarthObjectRecord]) -> dict[str, HazardLevel]:
    """Etiqueta por id; un id repetido conserva la primera clasificación."""

    out: dict[str, HazardLevel] = {}
    for record in records:
        out.setdefault(record.id, classify(record))
    return out
