# catalog/models.py
from pydantic import BaseModel, ConfigDict, Field, StrictInt, confloat
from typing import Union

# JSON numbers only: no numeric strings, no booleans, and no inf/NaN,
# which could be stored but never serialized back out
Price = Union[StrictInt, confloat(strict=True, allow_inf_nan=False)]

class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str
    price: Price
    category: str
    in_stock: bool = Field(alias="inStock")

    def to_dict(self):
        return self.model_dump(by_alias=True)
