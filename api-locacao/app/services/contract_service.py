# app/services/contract_service.py
from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from app.core.exceptions import NotFoundError, ValidationError
from app.infrastructure.database.models.contract_model import ContractModel
from app.repositories.contract_repository import ContractRepository
from app.repositories.product_repository import ProductRepository
from app.services.product_service import ProductService


NUMBER_REQUIRED_MESSAGE = "O numero do contrato é Obrigatorio"


def _check_number(number: int) -> None:
    if number < 1:
        raise ValidationError(NUMBER_REQUIRED_MESSAGE)


class ContractService:
    """
    Ciclo de vida dos contratos de locação.

    Toda criação/remoção recalcula a popularidade do produto vinculado
    dentro da mesma sessão (mesma transação).
    """

    def __init__(
        self,
        *,
        contract_repo: ContractRepository,
        product_repo: ProductRepository,
        product_service: ProductService,
    ) -> None:
        self._contract_repo = contract_repo
        self._product_repo = product_repo
        self._product_service = product_service

    def _get_or_404(self, contract_id: UUID) -> ContractModel:
        contract = self._contract_repo.get_by_id(contract_id)
        if contract is None:
            raise NotFoundError("Contrato não encontrado")
        return contract

    def create_contract(
        self,
        product_id: UUID,
        *,
        number: int,
        retirada: str,
        devolucao: str,
        tipo: str,
        status: str,
        observacao: str | None = None,
    ) -> ContractModel:
        _check_number(number)

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise NotFoundError("Produto não encontrado")

        contract = self._contract_repo.add(
            ContractModel(
                number=number,
                retirada=retirada,
                devolucao=devolucao,
                observacao=observacao,
                tipo=tipo,
                status=status,
                product=product,
            )
        )

        self._product_service.update_popularity(product.id)
        return contract

    def list_contracts(self, *, product_id: UUID | None = None) -> list[ContractModel]:
        return self._contract_repo.list_all(product_id=product_id)

    def get_contract(self, contract_id: UUID) -> ContractModel:
        return self._get_or_404(contract_id)

    def update_contract(self, contract_id: UUID, **fields) -> ContractModel:
        contract = self._get_or_404(contract_id)

        if fields.get("number") is not None:
            _check_number(fields["number"])

        for name in ("number", "retirada", "devolucao", "tipo", "status"):
            if fields.get(name) is not None:
                setattr(contract, name, fields[name])

        # observacao aceita null explícito (limpa a observação)
        if "observacao" in fields:
            contract.observacao = fields["observacao"]

        contract.updated_at = datetime.now(timezone.utc)
        return self._contract_repo.save(contract)

    def delete_contract(self, contract_id: UUID) -> None:
        contract = self._get_or_404(contract_id)
        product_id = contract.product_id

        # fora da coleção do produto antes do delete
        if contract.product is not None:
            contract.product.contracts.remove(contract)

        self._contract_repo.delete(contract)

        if product_id is not None:
            self._product_service.update_popularity(product_id)
