# app/api/schemas/product_schema.py

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.api.schemas.contract_schema import ContractResponse


class CreateProductRequest(BaseModel):
    code: str = Field(min_length=1, max_length=50)
    price: float = Field(ge=0)
    description: Optional[str] = None
    modelo: Optional[str] = Field(default=None, max_length=150)
    color: Optional[str] = Field(default=None, max_length=50)
    image: Optional[str] = Field(default=None, max_length=500)

    @field_validator("code", mode="before")
    @classmethod
    def strip_code(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


class UpdateProductRequest(BaseModel):
    # valores "falsy" (None, 0, "") mantêm o valor atual
    price: Optional[float] = Field(default=None, ge=0)
    description: Optional[str] = None
    modelo: Optional[str] = Field(default=None, max_length=150)
    color: Optional[str] = Field(default=None, max_length=50)


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    code: str
    price: float
    description: Optional[str] = None
    modelo: Optional[str] = None
    total_value: float = Field(serialization_alias="totalValue")
    color: Optional[str] = None
    popularity: int
    image: Optional[str] = None
    contracts: list[ContractResponse] = []

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
