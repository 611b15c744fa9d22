# app/infrastructure/realtime/socketio_product_notifier.py
from __future__ import annotations

from app.core.interfaces.product_notifier import (
    ProductNotifier,
    ProductCreatedEvent,
    ProductUpdatedEvent,
    ProductDeletedEvent,
    ProductPopularityChangedEvent,
)
from app.infrastructure.realtime.socketio_server import socketio


class SocketIOProductNotifier(ProductNotifier):
    def notify_product_created(self, event: ProductCreatedEvent) -> None:
        payload = {
            "product_id": event.product_id,
            "code": event.code,
            "created_at": event.created_at_iso,
            "modelo": event.modelo,
            "description": event.description,
        }
        socketio.emit("product:created", payload)  # global

    def notify_product_updated(self, event: ProductUpdatedEvent) -> None:
        payload = {
            "product_id": event.product_id,
            "code": event.code,
            "updated_at": event.updated_at_iso,
            "changed_fields": list(event.changed_fields),
        }
        socketio.emit("product:updated", payload)  # global

    def notify_product_deleted(self, event: ProductDeletedEvent) -> None:
        payload = {
            "product_id": event.product_id,
            "deleted_at": event.deleted_at_iso,
        }
        socketio.emit("product:deleted", payload)  # global

    def notify_product_popularity_changed(self, event: ProductPopularityChangedEvent) -> None:
        payload = {
            "product_id": event.product_id,
            "popularity": event.popularity,
            "changed_at": event.changed_at_iso,
        }
        socketio.emit("product:popularity_changed", payload)  # global
