# app/api/routes/product_routes.py

from __future__ import annotations

import io
import logging
import mimetypes
from uuid import UUID

from flask import Blueprint, jsonify, request, send_file

from app.config.settings import settings
from app.core.exceptions import AppError
from app.infrastructure.database.session import db_session

from app.repositories.product_repository import ProductRepository
from app.repositories.contract_repository import ContractRepository

from app.services.product_service import ProductService
from app.services.contract_service import ContractService

from app.api.schemas.product_schema import (
    CreateProductRequest,
    UpdateProductRequest,
    ProductResponse,
)
from app.api.schemas.contract_schema import CreateContractRequest, ContractResponse

from app.infrastructure.realtime.socketio_product_notifier import SocketIOProductNotifier
from app.infrastructure.storage.local_file_storage import LocalFileStorage, LocalFileStorageConfig

logger = logging.getLogger(__name__)

bp_prod = Blueprint("products", __name__)


# -------------------------
# Helpers
# -------------------------

def _build_storage() -> LocalFileStorage:
    return LocalFileStorage(config=LocalFileStorageConfig(base_path=settings.files_base_path))


def _build_service(session, *, with_storage: bool = False) -> ProductService:
    return ProductService(
        product_repo=ProductRepository(session) if session is not None else None,
        storage=_build_storage() if with_storage else None,
        public_base_url=settings.files_public_base_url,
        max_image_bytes=max(1, settings.max_file_size_mb) * 1024 * 1024,
        allowed_mime_types=settings.allowed_image_mime_types,
        product_notifier=SocketIOProductNotifier(),
    )


def _build_contract_service(session) -> ContractService:
    return ContractService(
        contract_repo=ContractRepository(session),
        product_repo=ProductRepository(session),
        product_service=_build_service(session),
    )


def _to_json(product) -> dict:
    return ProductResponse.model_validate(product).to_json()


# -------------------------
# Rotas (consulta)
# -------------------------

@bp_prod.get("")
def list_products():
    with db_session() as session:
        svc = _build_service(session)
        payload = [_to_json(p) for p in svc.find_all()]

    return jsonify(payload), 200


@bp_prod.get("/<uuid:product_id>")
def get_product(product_id: UUID):
    with db_session() as session:
        svc = _build_service(session)
        payload = _to_json(svc.find_unique(product_id))

    return jsonify(payload), 200


@bp_prod.get("/images/<path:name>")
def get_image(name: str):
    # leitura direta do storage, sem banco
    svc = _build_service(None, with_storage=True)
    content = svc.get_image(name)

    if content is None:
        return jsonify({"error": "Imagem não encontrada"}), 404

    mimetype = mimetypes.guess_type(name)[0] or "application/octet-stream"
    return send_file(io.BytesIO(content), mimetype=mimetype, download_name=name.rsplit("/", 1)[-1])


# -------------------------
# Rotas (mutação)
# -------------------------

@bp_prod.post("")
def create_product():
    payload = CreateProductRequest.model_validate(request.get_json(force=True))

    with db_session() as session:
        svc = _build_service(session)
        created = svc.create(**payload.model_dump())
        response = _to_json(created)

    return jsonify(response), 201


@bp_prod.patch("/<uuid:product_id>")
def update_product(product_id: UUID):
    payload = UpdateProductRequest.model_validate(request.get_json(force=True))

    with db_session() as session:
        svc = _build_service(session)
        product = svc.update_unique(product_id, **payload.model_dump())
        response = _to_json(product)

    return jsonify(response), 200


@bp_prod.delete("/<uuid:product_id>")
def delete_product(product_id: UUID):
    with db_session() as session:
        svc = _build_service(session)
        svc.delete_unique(product_id)

    return ("", 204)


@bp_prod.post("/<uuid:product_id>/popularity")
def refresh_popularity(product_id: UUID):
    with db_session() as session:
        svc = _build_service(session)
        svc.update_popularity(product_id)

    return ("", 204)


@bp_prod.post("/<uuid:product_id>/image")
def upload_image(product_id: UUID):
    """
    Upload da imagem do produto (multipart/form-data, campo 'image').
    Erros de domínio (404/400) seguem o handler padrão; o resto vira 500 genérico.
    """
    file = request.files.get("image")
    if file is None or not (file.filename or "").strip():
        return jsonify({"error": "Nenhuma imagem enviada"}), 400

    try:
        with db_session() as session:
            svc = _build_service(session, with_storage=True)
            product = svc.upload_image(
                product_id,
                fileobj=file.stream,
                filename=file.filename,
                content_type=file.mimetype,
            )
            response = _to_json(product)
    except AppError as e:
        if e.status_code < 500:
            raise
        logger.error("Erro ao fazer upload da imagem: %s", e)
        return jsonify({"error": "Erro ao fazer upload da imagem"}), 500
    except Exception:
        logger.exception("Erro ao fazer upload da imagem")
        return jsonify({"error": "Erro ao fazer upload da imagem"}), 500

    return jsonify(response), 200


# -------------------------
# Contratos do produto
# -------------------------

@bp_prod.post("/<uuid:product_id>/contracts")
def create_product_contract(product_id: UUID):
    payload = CreateContractRequest.model_validate(request.get_json(force=True))

    with db_session() as session:
        svc = _build_contract_service(session)
        contract = svc.create_contract(product_id, **payload.model_dump())
        response = ContractResponse.model_validate(contract).model_dump(mode="json")

    return jsonify(response), 201
