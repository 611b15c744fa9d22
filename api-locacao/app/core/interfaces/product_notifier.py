# app/core/interfaces/product_notifier.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Optional


@dataclass(frozen=True)
class ProductCreatedEvent:
    product_id: str
    code: str
    created_at_iso: str
    modelo: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class ProductUpdatedEvent:
    product_id: str
    code: str
    updated_at_iso: str
    changed_fields: tuple[str, ...] = ()


@dataclass(frozen=True)
class ProductDeletedEvent:
    product_id: str
    deleted_at_iso: str


@dataclass(frozen=True)
class ProductPopularityChangedEvent:
    product_id: str
    popularity: int
    changed_at_iso: str


class ProductNotifier(Protocol):
    def notify_product_created(self, event: ProductCreatedEvent) -> None: ...
    def notify_product_updated(self, event: ProductUpdatedEvent) -> None: ...
    def notify_product_deleted(self, event: ProductDeletedEvent) -> None: ...
    def notify_product_popularity_changed(self, event: ProductPopularityChangedEvent) -> None: ...
