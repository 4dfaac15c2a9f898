from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class SaleCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: int = Field(alias="productId")
    quantity: int = Field(gt=0)


class SaleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    product_id: int = Field(
        validation_alias=AliasChoices("product_id", "productId"),
        serialization_alias="productId"
    )
    quantity: int
    date: datetime
    total: float


class SaleCreated(BaseModel):
    message: str
    sale: SaleOut
