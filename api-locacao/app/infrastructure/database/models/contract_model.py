# app/infrastructure/database/models/contract_model.py

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infrastructure.database.base_model import BaseModel

if TYPE_CHECKING:
    from app.infrastructure.database.models.product_model import ProductModel


class ContractModel(BaseModel):
    __tablename__ = "tbContracts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    number: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    retirada: Mapped[str] = mapped_column(String(255), nullable=False)
    devolucao: Mapped[str] = mapped_column(String(255), nullable=False)
    observacao: Mapped[str] = mapped_column(Text, nullable=True)
    tipo: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False)

    # produto excluído -> contrato fica sem produto (histórico preservado)
    product_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("tbProducts.id", ondelete="SET NULL"), nullable=True, index=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=True)

    product: Mapped["ProductModel"] = relationship(back_populates="contracts")
