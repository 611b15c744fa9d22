# app/api/schemas/contract_schema.py
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

from app.services.contract_service import NUMBER_REQUIRED_MESSAGE


class CreateContractRequest(BaseModel):
    number: StrictInt
    retirada: str = Field(min_length=1)
    devolucao: str = Field(min_length=1)
    observacao: Optional[str] = None
    tipo: str
    status: str


class UpdateContractRequest(BaseModel):
    number: Optional[StrictInt] = None
    retirada: Optional[str] = Field(default=None, min_length=1)
    devolucao: Optional[str] = Field(default=None, min_length=1)
    observacao: Optional[str] = None
    tipo: Optional[str] = None
    status: Optional[str] = None


class ContractResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    number: int
    retirada: str = Field(min_length=1)
    devolucao: str = Field(min_length=1)
    observacao: Optional[str] = None
    tipo: str
    status: str
    product_id: Optional[UUID] = None

    @field_validator("number")
    @classmethod
    def number_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(NUMBER_REQUIRED_MESSAGE)
        return v
