"""Tests del recorrido paginado."""

from __future__ import annotations

import pytest

from chat2desk.adapters.pagination import collect_all, iterate_all
from chat2desk.core.interfaces.pages import Page


class FakeListing:
    """Listado de `size` enteros con un `total` reportado configurable."""

    def __init__(self, size: int, reported_total: int | None = None) -> None:
        self.items = list(range(size))
        self.reported_total = size if reported_total is None else reported_total
        self.calls: list[tuple[int, int]] = []

    async def __call__(self, offset: int, limit: int) -> Page[int]:
        self.calls.append((offset, limit))
        return Page(items=self.items[offset : offset + limit], total=self.reported_total)


@pytest.mark.asyncio
async def test_collects_every_item_once_in_order() -> None:
    listing = FakeListing(450)

    items = await collect_all(listing, page_size=200)

    assert items == list(range(450))
    assert [offset for offset, _ in listing.calls] == [0, 200, 400]


@pytest.mark.asyncio
async def test_stops_on_total_when_pages_are_full() -> None:
    listing = FakeListing(400)

    await collect_all(listing, page_size=200)

    assert len(listing.calls) == 2


@pytest.mark.asyncio
async def test_unknown_total_needs_an_empty_page() -> None:
    listing = FakeListing(400, reported_total=0)

    items = await collect_all(listing, page_size=200)

    assert len(items) == 400
    assert len(listing.calls) == 3


@pytest.mark.asyncio
async def test_short_page_wins_over_inflated_total() -> None:
    listing = FakeListing(250, reported_total=10_000)

    items = await collect_all(listing, page_size=200)

    assert len(items) == 250
    assert len(listing.calls) == 2


@pytest.mark.asyncio
async def test_empty_listing() -> None:
    listing = FakeListing(0)

    assert await collect_all(listing, page_size=50) == []
    assert listing.calls == [(0, 50)]


@pytest.mark.asyncio
async def test_iterate_all_is_lazy() -> None:
    listing = FakeListing(1000)

    seen = []
    async for item in iterate_all(listing, page_size=100):
        seen.append(item)
        if len(seen) == 150:
            break

    assert len(listing.calls) == 2


@pytest.mark.asyncio
async def test_rejects_non_positive_page_size() -> None:
    with pytest.raises(ValueError):
        await collect_all(FakeListing(10), page_size=0)
