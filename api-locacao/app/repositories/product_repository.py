# app/repositories/product_repository.py

from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session, selectinload

from app.core.base_repository import BaseRepository
from app.infrastructure.database.models.contract_model import ContractModel
from app.infrastructure.database.models.product_model import ProductModel


class ProductRepository(BaseRepository[ProductModel]):
    def __init__(self, session: Session) -> None:
        super().__init__(session)

    def find_all(self) -> list[ProductModel]:
        stmt = (
            select(ProductModel)
            .options(selectinload(ProductModel.contracts))
            .order_by(ProductModel.code.desc())
        )
        return list(self._session.execute(stmt).scalars().all())

    def get_by_id(self, product_id: UUID, *, with_contracts: bool = False) -> ProductModel | None:
        stmt = select(ProductModel).where(ProductModel.id == product_id)
        if with_contracts:
            stmt = stmt.options(selectinload(ProductModel.contracts))
        return self._session.execute(stmt).scalar_one_or_none()

    def get_by_code(self, code: str) -> ProductModel | None:
        stmt = select(ProductModel).where(ProductModel.code == code)
        return self._session.execute(stmt).scalar_one_or_none()

    def count_contracts(self, product_id: UUID) -> int:
        stmt = select(func.count(ContractModel.id)).where(ContractModel.product_id == product_id)
        return int(self._session.execute(stmt).scalar_one())

    def delete_by_id(self, product_id: UUID) -> bool:
        # contratos ficam sem produto (mesmo efeito do ON DELETE SET NULL)
        self._session.execute(
            update(ContractModel)
            .where(ContractModel.product_id == product_id)
            .values(product_id=None)
        )
        res = self._session.execute(delete(ProductModel).where(ProductModel.id == product_id))
        return (res.rowcount or 0) > 0
