# app/repositories/contract_repository.py

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.base_repository import BaseRepository
from app.infrastructure.database.models.contract_model import ContractModel


class ContractRepository(BaseRepository[ContractModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def get_by_id(self, contract_id: UUID) -> ContractModel | None:
        stmt = select(ContractModel).where(ContractModel.id == contract_id)
        return self._session.execute(stmt).scalar_one_or_none()

    def list_all(self, *, product_id: UUID | None = None) -> list[ContractModel]:
        stmt = select(ContractModel)
        if product_id is not None:
            stmt = stmt.where(ContractModel.product_id == product_id)
        stmt = stmt.order_by(ContractModel.number.desc())
        return list(self._session.execute(stmt).scalars().all())

    def delete(self, model: ContractModel) -> None:
        self._session.delete(model)
        self._session.flush()
