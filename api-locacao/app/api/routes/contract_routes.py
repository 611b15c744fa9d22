# app/api/routes/contract_routes.py

from __future__ import annotations

from uuid import UUID

from flask import Blueprint, jsonify, request

from app.config.settings import settings
from app.infrastructure.database.session import db_session
from app.infrastructure.realtime.socketio_product_notifier import SocketIOProductNotifier
from app.repositories.contract_repository import ContractRepository
from app.repositories.product_repository import ProductRepository
from app.services.contract_service import ContractService
from app.services.product_service import ProductService
from app.api.schemas.contract_schema import ContractResponse, UpdateContractRequest

bp_contracts = Blueprint("contracts", __name__)


def _build_contract_service(session) -> ContractService:
    product_repo = ProductRepository(session)
    return ContractService(
        contract_repo=ContractRepository(session),
        product_repo=product_repo,
        product_service=ProductService(
            product_repo=product_repo,
            public_base_url=settings.files_public_base_url,
            product_notifier=SocketIOProductNotifier(),
        ),
    )


def _to_json(contract) -> dict:
    return ContractResponse.model_validate(contract).model_dump(mode="json")


@bp_contracts.get("")
def list_contracts():
    raw_product_id = (request.args.get("product_id") or "").strip() or None
    try:
        product_id = UUID(raw_product_id) if raw_product_id else None
    except ValueError:
        return jsonify({"error": "Parâmetro product_id inválido."}), 400

    with db_session() as session:
        svc = _build_contract_service(session)
        payload = [_to_json(c) for c in svc.list_contracts(product_id=product_id)]

    return jsonify(payload), 200


@bp_contracts.get("/<uuid:contract_id>")
def get_contract(contract_id: UUID):
    with db_session() as session:
        svc = _build_contract_service(session)
        payload = _to_json(svc.get_contract(contract_id))

    return jsonify(payload), 200


@bp_contracts.patch("/<uuid:contract_id>")
def update_contract(contract_id: UUID):
    payload = UpdateContractRequest.model_validate(request.get_json(force=True))

    with db_session() as session:
        svc = _build_contract_service(session)
        contract = svc.update_contract(contract_id, **payload.model_dump(exclude_unset=True))
        response = _to_json(contract)

    return jsonify(response), 200


@bp_contracts.delete("/<uuid:contract_id>")
def delete_contract(contract_id: UUID):
    with db_session() as session:
        svc = _build_contract_service(session)
        svc.delete_contract(contract_id)

    return ("", 204)
