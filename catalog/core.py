from pydantic import BaseModel, ConfigDict, Field, StrictBool
from typing import Optional, Dict, Any

from .errors import ValidationError
from .models import Price, Product

REQUIRED_FIELDS_MESSAGE = "All product fields are required"

class ProductIn(BaseModel):
    """Create body. Fields are optional here so that missing ones surface as a
    single validation error rather than the framework's per-field report."""
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Price] = None
    category: Optional[str] = None
    in_stock: Optional[StrictBool] = Field(default=None, alias="inStock")

class ProductUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Price] = None
    category: Optional[str] = None
    in_stock: Optional[StrictBool] = Field(default=None, alias="inStock")

    def changes(self) -> Dict[str, Any]:
        # null and omitted fields both mean "leave unchanged"
        return {k: v for k, v in self.model_dump().items() if v is not None}

def _make_product(product_id: str, p: ProductIn) -> Product:
    # price and inStock may legitimately be 0 / False
    if not p.name or not p.description or p.price is None or not p.category or p.in_stock is None:
        raise ValidationError(REQUIRED_FIELDS_MESSAGE)
    return Product(
        id=product_id,
        name=p.name,
        description=p.description,
        price=p.price,
        category=p.category,
        in_stock=p.in_stock,
    )
