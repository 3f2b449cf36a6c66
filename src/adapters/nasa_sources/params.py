"""Validación de entradas de consulta antes de tocar la red."""

from __future__ import annotations

import datetime as dt

from core.domain.queries import DateInput
from core.errors import InvalidQueryError


def coerce_date(value: DateInput | None, *, field: str) -> dt.date:
    if value is None:
        raise InvalidQueryError(f"{field} is required")
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return dt.date.fromisoformat(value.strip())
        except ValueError:
            raise InvalidQueryError(f"{field} must be an ISO date (YYYY-MM-DD), got {value!r}") from None
    raise InvalidQueryError(f"{field} is required")


def coerce_range(
    start: DateInput | None,
    end: DateInput | None,
    *,
    max_days: int | None = None,
) -> tuple[dt.date, dt.date]:
    """Valida un rango cerrado `[start, end]`."""

    start_date = coerce_date(start, field="start_date")
    end_date = coerce_date(end, field="end_date")
    if start_date > end_date:
        raise InvalidQueryError(
            f"start_date {start_date.isoformat()} is after end_date {end_date.isoformat()}"
        )
    if max_days is not None and (end_date - start_date).days > max_days:
        raise InvalidQueryError(f"date range cannot exceed {max_days} days")
    return start_date, end_date
