"""Máquina de estados de "cargar más" para un recurso de páginas fijas.

Estados: `IDLE -> FETCHING(1) -> HAS_PAGE(1) -> FETCHING(2) -> ...`.
`EXHAUSTED` se alcanza cuando una página trae menos registros que el tamaño
fijo de página del recurso.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


class PageState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    HAS_PAGE = "has_page"
    EXHAUSTED = "exhausted"


@dataclass
class PaginationAccumulator(Generic[T]):
    """Acumula páginas de una única consulta lógica.

    - `begin()` no hace nada (devuelve `None`) si ya hay una página en vuelo o
      si el recurso se agotó.
    - El éxito agrega al final, nunca reemplaza, y avanza el contador en uno.
    - El fallo o la cancelación vuelven al último `HAS_PAGE` (o `IDLE`) sin
      avanzar el contador, así que reintentar pide la misma página.
    """

    page_size: int
    items: list[T] = field(default_factory=list)
    state: PageState = PageState.IDLE
    page: int = 0
    pending_page: int | None = None
    last_error: Exception | None = None

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError("page_size must be >= 1")

    @property
    def next_page(self) -> int:
        return self.page + 1

    @property
    def is_fetching(self) -> bool:
        return self.state is PageState.FETCHING

    @property
    def has_more(self) -> bool:
        return self.state is not PageState.EXHAUSTED

    def begin(self) -> int | None:
        if self.state in (PageState.FETCHING, PageState.EXHAUSTED):
            return None
        self.state = PageState.FETCHING
        self.pending_page = self.next_page
        self.last_error = None
        return self.pending_page

    def complete(self, page: int, batch: Sequence[T]) -> None:
        self._check_pending(page)
        self.items.extend(batch)
        self.page = page
        self.pending_page = None
        self.state = PageState.EXHAUSTED if len(batch) < self.page_size else PageState.HAS_PAGE

    def fail(self, page: int, error: Exception) -> None:
        self._settle(page)
        self.last_error = error

    def cancel(self, page: int) -> None:
        """La petición en vuelo se abandonó: mismo retroceso que `fail`, sin error."""

        self._settle(page)

    def _settle(self, page: int) -> None:
        self._check_pending(page)
        self.pending_page = None
        self.state = PageState.HAS_PAGE if self.page else PageState.IDLE

    def _check_pending(self, page: int) -> None:
        if self.state is not PageState.FETCHING or page != self.pending_page:
            raise RuntimeError(
                f"page {page} resolved while state={self.state.value} pending={self.pending_page}"
            )
