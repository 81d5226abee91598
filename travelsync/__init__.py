"""Cross-view synchronization engine for a travel log's list and globe views."""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from travelsync.api.catalog import CatalogEntry
    from travelsync.runtime.session import SyncSession


def create_session(*, catalog: "list[CatalogEntry]", **options: Any) -> "SyncSession":
    """Create a sync session with runtime-owned composition."""
    from travelsync.runtime.session import SyncSession

    return SyncSession(catalog=catalog, **options)

__all__ = ["create_session"]
