"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands. Request bodies are deliberately loose: field
presence and types are checked by the creation service so that callers get
the domain's ordered validation messages instead of framework errors.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "items": [
                        {
                            "product_id": "6650f1c2a1b2c3d4e5f60718",
                            "color": "red",
                            "size": "M",
                            "quantity": 2,
                            "price": 199000,
                        }
                    ],
                    "shippingAddress": {
                        "fullName": "Nguyen Van A",
                        "phone": "0901234567",
                        "province": "Ho Chi Minh",
                        "district": "District 1",
                        "ward": "Ben Nghe",
                        "street": "12 Le Loi",
                    },
                    "shipping_fee": 30000,
                    "paymentMethod": "cash",
                    "total_amount": 428000,
                }
            ]
        },
    )

    items: Any = None
    shipping_address: Any = Field(default=None, alias="shippingAddress")
    shipping_fee: Any = None
    payment_method: Any = Field(default=None, alias="paymentMethod")
    total_amount: Any = None


class ChangeStatusRequest(BaseModel):
    status: Any = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class AddressResponse(BaseModel):
    full_name: str
    phone_number: str
    province: str
    district: str
    ward: str
    street: str


class OrderItemResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    product_id: str
    color: str
    size: str
    quantity: int
    price: float
    product_name: str = Field(alias="productName")
    image_url: str = Field(alias="imageUrl")
    unit_price: float = Field(alias="unitPrice")


class OrderResponse(BaseModel):
    id: str
    user_id: str
    items: list[OrderItemResponse]
    address: AddressResponse | None = None
    shipping_fee: float
    total_amount: float
    payment_method: str
    status: str
    payment_info: dict = Field(default_factory=dict)
    cancelled_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrderUpdateResponse(BaseModel):
    message: str
    order: OrderResponse


class ErrorResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    message: str
