"""Subscription token shared by store and surface contracts."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Subscription:
    """Opaque subscription token."""

    id: int
