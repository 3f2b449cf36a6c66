"""Modelos del dominio (Pydantic v2).

- Describen *qué* devuelve el servicio remoto, no *cómo* se obtiene.
- Los alias de validación declaran la forma del JSON remoto; los registros se
  validan directamente con `model_validate(payload)`.
- Son inmutables: cada llamada exitosa de un adaptador crea registros nuevos.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Annotated, Any, Generic, Literal, TypeVar

from pydantic import AliasPath, BaseModel, BeforeValidator, Field, ValidationInfo, field_validator
from pydantic.config import ConfigDict

from core.domain.language import Language


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip() or None
    return value


OptionalText = Annotated[str | None, BeforeValidator(_blank_to_none)]


class _Record(BaseModel):
    # El servicio agrega campos sin aviso; se ignoran.
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class DailyPictureRecord(_Record):
    """Imagen (o video) astronómica del día."""

    date: dt.date
    title: str = Field(..., description="Título publicado.")
    explanation: str = Field(..., description="Texto narrativo que acompaña la imagen.")
    media_type: Literal["image", "video"]
    url: str = Field(..., min_length=1, description="URL principal (imagen o video).")
    hd_url: OptionalText = Field(
        default=None,
        validation_alias="hdurl",
        description="URL de alta resolución; solo existe para media_type=image.",
    )
    thumbnail_url: OptionalText = Field(
        default=None,
        description="Miniatura del video cuando el servicio la ofrece.",
    )
    copyright: OptionalText = Field(default=None, description="Atribución, si existe.")

    @field_validator("hd_url")
    @classmethod
    def _videos_have_no_hd_url(cls, value: str | None, info: ValidationInfo) -> str | None:
        if info.data.get("media_type") == "video":
            return None
        return value

    @property
    def is_video(self) -> bool:
        return self.media_type == "video"


class RoverCamera(_Record):
    name: str = Field(..., min_length=1, description="Código corto (p.ej. 'FHAZ').")
    full_name: str


class RoverDescriptor(_Record):
    name: str
    status: str
    launch_date: dt.date
    landing_date: dt.date


class RoverImageRecord(_Record):
    """Foto de un rover. El `id` es único dentro del catálogo de un rover."""

    id: int = Field(..., strict=True)
    sol: int = Field(..., ge=0, strict=True, description="Día marciano de la misión.")
    camera: RoverCamera
    img_src: str = Field(..., min_length=1)
    earth_date: dt.date
    rover: RoverDescriptor


class DiameterRange(_Record):
    """Diámetro estimado en metros."""

    min_m: float = Field(..., ge=0, allow_inf_nan=False, validation_alias="estimated_diameter_min")
    max_m: float = Field(..., ge=0, allow_inf_nan=False, validation_alias="estimated_diameter_max")


class CloseApproach(_Record):
    """Una pasada; el feed manda velocidad y distancia como strings numéricos."""

    date: dt.date = Field(..., validation_alias="close_approach_date")
    relative_velocity_kmh: float = Field(
        ...,
        ge=0,
        allow_inf_nan=False,
        validation_alias=AliasPath("relative_velocity", "kilometers_per_hour"),
    )
    miss_distance_km: float = Field(
        ...,
        ge=0,
        allow_inf_nan=False,
        validation_alias=AliasPath("miss_distance", "kilometers"),
    )
    orbiting_body: str


class NearEarthObjectRecord(_Record):
    """Objeto cercano a la Tierra con sus aproximaciones ordenadas."""

    id: str = Field(..., min_length=1)
    name: str
    absolute_magnitude_h: float = Field(..., allow_inf_nan=False)
    estimated_diameter_m: DiameterRange = Field(..., validation_alias=AliasPath("estimated_diameter", "meters"))
    is_potentially_hazardous: bool = Field(..., strict=True, validation_alias="is_potentially_hazardous_asteroid")
    is_sentry_object: bool = Field(..., strict=True)
    close_approaches: tuple[CloseApproach, ...] = Field(..., validation_alias="close_approach_data")
    nasa_jpl_url: OptionalText = None

    @property
    def first_approach(self) -> CloseApproach | None:
        return self.close_approaches[0] if self.close_approaches else None

    @property
    def earliest_approach_date(self) -> dt.date | None:
        if not self.close_approaches:
            return None
        return min(approach.date for approach in self.close_approaches)


class HazardLevel(str, Enum):
    """Etiqueta heurística de riesgo (no es un cálculo físico)."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    def label(self, language: Language = Language.ENGLISH) -> str:
        if language is Language.PORTUGUESE:
            return _PT_HAZARD_LABELS[self]
        return self.value


_PT_HAZARD_LABELS = {
    HazardLevel.LOW: "baixo",
    HazardLevel.MEDIUM: "médio",
    HazardLevel.HIGH: "alto",
}


class FeedSummary(_Record):
    """Conteos sobre la secuencia aplanada del feed de NEOs."""

    total_count: int = Field(default=0, ge=0)
    hazardous_count: int = Field(default=0, ge=0)
    sentry_count: int = Field(default=0, ge=0)
    dates: tuple[dt.date, ...] = ()


T = TypeVar("T")


@dataclass
class AggregateResult(Generic[T]):
    """Vista que el coordinador entrega a la capa de presentación.

    Permite distinguir "cargando" (`is_loading`), "error" (`last_error`) y
    "sin registros" (`items` vacío sin ninguno de los anteriores).
    `has_more` solo tiene valor para recursos paginados.
    """

    items: list[T] = field(default_factory=list)
    is_loading: bool = False
    last_error: Exception | None = None
    has_more: bool | None = None
    summary: FeedSummary | None = None
    hazards: dict[str, HazardLevel] = field(default_factory=dict)

    def snapshot(self) -> "AggregateResult[T]":
        """Copia superficial para suscriptores; los registros son inmutables."""

        return replace(self, items=list(self.items), hazards=dict(self.hazards))

    def as_dict(self) -> dict[str, Any]:
        return {
            "items": [item.model_dump(mode="json") for item in self.items],
            "is_loading": self.is_loading,
            "last_error": str(self.last_error) if self.last_error else None,
            "has_more": self.has_more,
            "summary": self.summary.model_dump(mode="json") if self.summary else None,
            "hazards": {key: level.value for key, level in self.hazards.items()},
        }
