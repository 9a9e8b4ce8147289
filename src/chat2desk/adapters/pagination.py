"""Recorrido completo de listados paginados por offset/limit.

Condiciones de parada:
- Página corta (menos elementos que `page_size`, incluida la vacía): es la
  condición que manda, aunque el `total` del proveedor sea inconsistente.
- El offset alcanza el `total` reportado (si el endpoint lo da y es > 0).
"""

from __future__ import annotations

from typing import AsyncIterator, TypeVar

from chat2desk.core.interfaces.pages import PageFetcher

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 200


async def iterate_all(
    fetch: PageFetcher[T],
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
    start_offset: int = 0,
) -> AsyncIterator[T]:
    if page_size <= 0:
        raise ValueError("page_size must be positive")

    offset = max(start_offset, 0)
    while True:
        page = await fetch(offset, page_size)
        for item in page.items:
            yield item

        if len(page.items) < page_size:
            return
        offset += page_size
        if page.total and offset >= page.total:
            return


async def collect_all(
    fetch: PageFetcher[T],
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
    start_offset: int = 0,
) -> list[T]:
    """Junta todas las páginas en una sola lista, en orden."""

    return [item async for item in iterate_all(fetch, page_size=page_size, start_offset=start_offset)]
