from app.infrastructure.database.models.product_model import ProductModel
from app.infrastructure.database.models.contract_model import ContractModel

__all__ = ["ProductModel", "ContractModel"]
