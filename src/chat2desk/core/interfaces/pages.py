"""Contrato de un listado paginado por offset/limit."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Awaitable, Generic, Protocol, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """Una página de resultados.

    `total` es el total que reporta el proveedor en `meta`, o `None` si el
    endpoint no lo devuelve.
    """

    items: list[T] = field(default_factory=list)
    total: int | None = None


class PageFetcher(Protocol[T]):
    """Pide la página que empieza en `offset` con hasta `limit` elementos."""

    def __call__(self, offset: int, limit: int) -> Awaitable[Page[T]]: ...
