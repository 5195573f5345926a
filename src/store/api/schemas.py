"""Pydantic request/response schemas for the Store API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands. Money crosses the boundary as a string with two
decimal places.
"""

from decimal import Decimal

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class RegisterShopperRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    payment_method: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Gabrielle",
                    "payment_method": "credit_ending_5151",
                }
            ]
        }
    }


class RegisterProductRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    price: Decimal = Field(ge=0, decimal_places=2)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Silk Shirt",
                    "price": "799.90",
                }
            ]
        }
    }


class ChangePriceRequest(BaseModel):
    price: Decimal = Field(ge=0, decimal_places=2)


class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1, default=1)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ShopperIdResponse(BaseModel):
    shopper_id: str


class ProductIdResponse(BaseModel):
    product_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class ShopperResponse(BaseModel):
    shopper_id: str
    name: str
    payment_method: str | None = None


class ProductResponse(BaseModel):
    product_id: str
    name: str
    price: str


class CartLineResponse(BaseModel):
    product_id: str
    quantity: int


class PurchaseLineResponse(BaseModel):
    product_id: str
    name: str
    unit_price: str
    quantity: int


class PurchaseResponse(BaseModel):
    id: str
    shopper_id: str
    created_at: str
    total: str
    lines: list[PurchaseLineResponse]


class ErrorDetail(BaseModel):
    kind: str
    message: str
    retryable: bool = False


class ErrorResponse(BaseModel):
    error: ErrorDetail
