"""Pydantic request/response schemas for the Marketplace API.

These are external contracts, separate from the internal Protean commands.
Business rules (quantities, address completeness, status names) are enforced
by the domain, so request models only describe shape.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class AddressSchema(BaseModel):
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None


class ProductSummary(BaseModel):
    id: str
    name: str
    price: float
    category: str | None = None
    images: list[str] = Field(default_factory=list)
    is_available: bool
    vendor_id: str | None = None


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = 1

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "prod-001",
                    "quantity": 2,
                }
            ]
        }
    }


class UpdateCartItemRequest(BaseModel):
    quantity: int


class CartItemResponse(BaseModel):
    id: str
    product_id: str
    quantity: int
    price_snapshot: float
    added_at: datetime | None = None
    product: ProductSummary | None = None  # None when the product has been removed


class CartResponse(BaseModel):
    id: str
    user_id: str
    items: list[CartItemResponse]
    item_count: int
    subtotal: float
    updated_at: datetime | None = None


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class CheckoutRequest(BaseModel):
    shipping_address: AddressSchema | None = None
    payment_method: str = "cod"
    notes: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shipping_address": {
                        "street": "12 MG Road",
                        "city": "Bengaluru",
                        "state": "Karnataka",
                        "zip_code": "560001",
                        "country": "India",
                    },
                    "payment_method": "cod",
                    "notes": "Call before delivery",
                }
            ]
        }
    }


class UpdateOrderStatusRequest(BaseModel):
    status: str


class OrderItemResponse(BaseModel):
    product_id: str
    name: str
    quantity: int
    price: float


class OrderResponse(BaseModel):
    id: str
    user_id: str
    items: list[OrderItemResponse]
    total_price: float
    shipping_address: AddressSchema
    payment_method: str
    payment_status: str
    status: str
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class StatsResponse(BaseModel):
    total_orders: int
    pending_orders: int
    total_revenue: float
    total_products: int


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class CreateProductRequest(BaseModel):
    name: str
    description: str
    price: float = Field(ge=0)
    category: str | None = None
    images: list[str] = Field(default_factory=list)


class UpdateProductRequest(BaseModel):
    name: str | None = None
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    category: str | None = None
    images: list[str] | None = None


class SetAvailabilityRequest(BaseModel):
    is_available: bool


class ProductResponse(ProductSummary):
    description: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
