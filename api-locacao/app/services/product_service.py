# app/services/product_service.py
import logging
from datetime import datetime, timezone
from typing import BinaryIO
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.infrastructure.database.models.product_model import ProductModel
from app.infrastructure.storage.file_storage import FileStorage
from app.repositories.product_repository import ProductRepository

from app.core.interfaces.product_notifier import (
    ProductNotifier,
    ProductCreatedEvent,
    ProductUpdatedEvent,
    ProductDeletedEvent,
    ProductPopularityChangedEvent,
)

logger = logging.getLogger(__name__)

TOTAL_VALUE_FACTOR = 3


class ProductService:
    def __init__(
        self,
        *,
        product_repo: ProductRepository | None,
        storage: FileStorage | None = None,
        public_base_url: str = "",
        max_image_bytes: int | None = None,
        allowed_mime_types: set[str] | None = None,
        product_notifier: ProductNotifier | None = None,
    ) -> None:
        self._product_repo = product_repo
        self._storage = storage
        self._public_base_url = (public_base_url or "").rstrip("/")
        self._max_image_bytes = max_image_bytes
        self._allowed_mime_types = allowed_mime_types or set()
        self._product_notifier = product_notifier

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    def _get_or_404(self, product_id: UUID, *, with_contracts: bool = False, message: str = "Produto não encontrado") -> ProductModel:
        product = self._product_repo.get_by_id(product_id, with_contracts=with_contracts)
        if product is None:
            raise NotFoundError(message)
        return product

    def public_url(self, stored_name: str) -> str:
        return f"{self._public_base_url}/{stored_name}"

    # -------------------------
    # Consulta
    # -------------------------

    def find_all(self) -> list[ProductModel]:
        return self._product_repo.find_all()

    def find_unique(self, product_id: UUID) -> ProductModel:
        return self._get_or_404(product_id, with_contracts=True)

    # -------------------------
    # Mutação
    # -------------------------

    def create(
        self,
        *,
        code: str,
        price: float,
        description: str | None = None,
        modelo: str | None = None,
        color: str | None = None,
        image: str | None = None,
    ) -> ProductModel:
        code = (code or "").strip()
        if not code:
            raise ValidationError("O código do produto é obrigatório")

        if self._product_repo.get_by_code(code) is not None:
            raise ConflictError("Este Produto ja esta cadastrado")

        model = ProductModel(
            code=code,
            price=price,
            description=description,
            modelo=modelo,
            color=color,
            image=image,
            total_value=price * TOTAL_VALUE_FACTOR,
            popularity=0,
            contracts=[],
        )

        try:
            created = self._product_repo.add(model)
        except IntegrityError as e:
            # corrida entre a checagem e o insert (índice único em code)
            logger.warning("Código de produto duplicado no insert: %s (%s)", code, e.orig)
            raise ConflictError("Este Produto ja esta cadastrado") from e

        if self._product_notifier:
            self._product_notifier.notify_product_created(
                ProductCreatedEvent(
                    product_id=str(created.id),
                    code=created.code,
                    created_at_iso=self._now().isoformat(),
                    modelo=created.modelo,
                    description=created.description,
                )
            )

        return created

    def update_popularity(self, product_id: UUID) -> None:
        try:
            product = self._get_or_404(product_id, message=f"Produto com ID {product_id} não encontrado.")

            product.popularity = self._product_repo.count_contracts(product.id)
            product.updated_at = self._now()

            self._product_repo.save(product)
        except Exception:
            logger.exception("Erro ao atualizar a popularidade do produto %s", product_id)
            raise

        if self._product_notifier:
            self._product_notifier.notify_product_popularity_changed(
                ProductPopularityChangedEvent(
                    product_id=str(product.id),
                    popularity=int(product.popularity),
                    changed_at_iso=self._now().isoformat(),
                )
            )

    def update_unique(
        self,
        product_id: UUID,
        *,
        price: float | None = None,
        description: str | None = None,
        modelo: str | None = None,
        color: str | None = None,
    ) -> ProductModel:
        product = self._get_or_404(product_id, message="Produto Não Encontrado")

        changed: list[str] = []

        if price:
            product.price = price
            product.total_value = price * TOTAL_VALUE_FACTOR
            changed += ["price", "totalValue"]
        if description:
            product.description = description
            changed.append("description")
        if modelo:
            product.modelo = modelo
            changed.append("modelo")
        if color:
            product.color = color
            changed.append("color")

        product.updated_at = self._now()
        self._product_repo.save(product)

        if self._product_notifier and changed:
            self._product_notifier.notify_product_updated(
                ProductUpdatedEvent(
                    product_id=str(product.id),
                    code=product.code,
                    updated_at_iso=product.updated_at.isoformat(),
                    changed_fields=tuple(changed),
                )
            )

        return product

    def delete_unique(self, product_id: UUID) -> None:
        deleted = self._product_repo.delete_by_id(product_id)

        if deleted and self._product_notifier:
            self._product_notifier.notify_product_deleted(
                ProductDeletedEvent(
                    product_id=str(product_id),
                    deleted_at_iso=self._now().isoformat(),
                )
            )

    # -------------------------
    # Imagens
    # -------------------------

    def _validate_image(self, content_type: str | None) -> None:
        if not self._allowed_mime_types:
            return  # whitelist desativada

        if not content_type or content_type not in self._allowed_mime_types:
            raise ValidationError(f"Tipo de imagem não permitido: '{content_type}'.")

    def upload_image(
        self,
        product_id: UUID,
        *,
        fileobj: BinaryIO,
        filename: str,
        content_type: str | None,
    ) -> ProductModel:
        if self._storage is None:
            raise RuntimeError("Storage de arquivos não configurado no ProductService.")

        product = self._get_or_404(product_id, with_contracts=True)

        self._validate_image(content_type)

        stored = self._storage.save(
            fileobj=fileobj,
            original_name=filename,
            content_type=content_type,
        )

        try:
            if self._max_image_bytes is not None and stored.size_bytes > self._max_image_bytes:
                raise ValidationError(
                    f"Arquivo '{stored.original_name}' excede o limite de "
                    f"{self._max_image_bytes // (1024 * 1024)}MB."
                )

            previous = product.image
            product.image = self.public_url(stored.stored_name)
            product.updated_at = self._now()
            self._product_repo.save(product)
        except Exception:
            # rollback real do arquivo recém-salvo
            self._storage.delete(stored_name=stored.stored_name)
            raise

        logger.info("Imagem do produto %s atualizada: %s (antes: %s)", product.id, product.image, previous)

        if self._product_notifier:
            self._product_notifier.notify_product_updated(
                ProductUpdatedEvent(
                    product_id=str(product.id),
                    code=product.code,
                    updated_at_iso=product.updated_at.isoformat(),
                    changed_fields=("image",),
                )
            )

        return product

    def get_image(self, name: str) -> bytes | None:
        if self._storage is None:
            logger.error("Storage de arquivos não configurado; imagem %s indisponível", name)
            return None

        try:
            return self._storage.get(stored_name=name)
        except Exception:
            logger.exception("Erro ao buscar a imagem %s", name)
            return None
