# app/infrastructure/database/models/product_model.py

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Integer, Numeric, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infrastructure.database.base_model import BaseModel

if TYPE_CHECKING:
    from app.infrastructure.database.models.contract_model import ContractModel


class ProductModel(BaseModel):
    __tablename__ = "tbProducts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    code: Mapped[str] = mapped_column(String(50), nullable=False, unique=True, index=True)

    price: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    description: Mapped[str] = mapped_column(Text, nullable=True)
    modelo: Mapped[str] = mapped_column(String(150), nullable=True)
    color: Mapped[str] = mapped_column(String(50), nullable=True)

    # derivados: total = price * 3 / popularity = qtd. de contratos
    total_value: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    popularity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    image: Mapped[str] = mapped_column(String(500), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=True)

    contracts: Mapped[list["ContractModel"]] = relationship(
        back_populates="product",
        order_by="ContractModel.number",
    )
