"""Read-only catalog entry contracts."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from travelsync.api.state import GeoPoint


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """One travel record as supplied by the catalog provider."""

    id: str
    coordinate: GeoPoint
    title: str = ""
    country: str = ""
    tags: tuple[str, ...] = ()


class CatalogIndex:
    """Ordered id lookup over catalog entries."""

    def __init__(self, entries: Iterable[CatalogEntry]) -> None:
        ordered = tuple(entries)
        by_id: dict[str, CatalogEntry] = {}
        for entry in ordered:
            if entry.id in by_id:
                raise ValueError(f"duplicate catalog id: {entry.id}")
            by_id[entry.id] = entry
        self._entries = ordered
        self._by_id = by_id

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._by_id

    def get(self, item_id: str | None) -> CatalogEntry | None:
        """Return the entry for an id, or ``None`` when unknown."""
        if item_id is None:
            return None
        return self._by_id.get(item_id)

    def entries(self) -> tuple[CatalogEntry, ...]:
        return self._entries
