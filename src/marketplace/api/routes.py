"""FastAPI routes for the Marketplace — cart, orders, administration and products.

Mutations are sent as commands through ``dispatch``. Cart mutations and
checkout run under the per-user cart lock; order transitions run under the
per-order lock.
"""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from marketplace.api.caller import Caller, current_caller, require_admin, require_vendor
from marketplace.api.schemas import (
    AddressSchema,
    AddToCartRequest,
    CartItemResponse,
    CartResponse,
    CheckoutRequest,
    CreateProductRequest,
    OrderItemResponse,
    OrderResponse,
    ProductResponse,
    ProductSummary,
    SetAvailabilityRequest,
    StatsResponse,
    UpdateCartItemRequest,
    UpdateOrderStatusRequest,
    UpdateProductRequest,
)
from marketplace.cart.cart import ShoppingCart
from marketplace.cart.items import AddToCart, RemoveFromCart, UpdateCartItem
from marketplace.cart.management import ClearCart, OpenCart
from marketplace.catalogue.management import (
    AddProduct,
    DeleteProduct,
    SetProductAvailability,
    UpdateProduct,
    load_product,
)
from marketplace.catalogue.product import Product
from marketplace.catalogue.reader import CatalogueReader
from marketplace.checkout.placement import PlaceOrder
from marketplace.dispatch import dispatch
from marketplace.order import queries
from marketplace.order.cancellation import CancelOrder
from marketplace.order.status import RecordPayment, UpdateOrderStatus
from marketplace.utils.locking import cart_locks, order_locks


# ---------------------------------------------------------------------------
# Response builders
# ---------------------------------------------------------------------------
def _product_summary(snapshot) -> ProductSummary | None:
    if snapshot is None:
        return None
    return ProductSummary(
        id=snapshot.product_id,
        name=snapshot.name,
        price=snapshot.price,
        category=snapshot.category,
        images=snapshot.images,
        is_available=snapshot.is_available,
        vendor_id=snapshot.vendor_id,
    )


def cart_response(cart: ShoppingCart) -> CartResponse:
    reader = CatalogueReader()
    return CartResponse(
        id=str(cart.id),
        user_id=str(cart.user_id),
        items=[
            CartItemResponse(
                id=str(item.id),
                product_id=str(item.product_id),
                quantity=item.quantity,
                price_snapshot=item.price_snapshot,
                added_at=item.added_at,
                product=_product_summary(reader.find(item.product_id)),
            )
            for item in cart.items
        ],
        item_count=cart.item_count(),
        subtotal=cart.subtotal(),
        updated_at=cart.updated_at,
    )


def order_response(order) -> OrderResponse:
    address = order.shipping_address
    return OrderResponse(
        id=str(order.id),
        user_id=str(order.user_id),
        items=[
            OrderItemResponse(
                product_id=str(item.product_id),
                name=item.name,
                quantity=item.quantity,
                price=item.price,
            )
            for item in order.items
        ],
        total_price=order.total_price,
        shipping_address=AddressSchema(
            street=address.street,
            city=address.city,
            state=address.state,
            zip_code=address.zip_code,
            country=address.country,
        ),
        payment_method=order.payment_method,
        payment_status=order.payment_status,
        status=order.status,
        notes=order.notes,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def product_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=str(product.id),
        name=product.name,
        description=product.description,
        price=product.price,
        category=product.category,
        images=product.image_urls(),
        is_available=bool(product.is_available),
        vendor_id=str(product.vendor_id),
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def _cart_of(user_id) -> CartResponse:
    return cart_response(current_domain.repository_for(ShoppingCart).for_user(user_id))


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def get_cart(caller: Caller = Depends(current_caller)) -> CartResponse:
    dispatch(OpenCart(user_id=caller.user_id), cart_locks, caller.user_id)
    return _cart_of(caller.user_id)


@cart_router.post("/items", response_model=CartResponse)
async def add_to_cart(body: AddToCartRequest, caller: Caller = Depends(current_caller)) -> CartResponse:
    command = AddToCart(
        user_id=caller.user_id,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    dispatch(command, cart_locks, caller.user_id)
    return _cart_of(caller.user_id)


@cart_router.put("/items/{item_id}", response_model=CartResponse)
async def update_cart_item(
    item_id: str, body: UpdateCartItemRequest, caller: Caller = Depends(current_caller)
) -> CartResponse:
    command = UpdateCartItem(
        user_id=caller.user_id,
        item_id=item_id,
        quantity=body.quantity,
    )
    dispatch(command, cart_locks, caller.user_id)
    return _cart_of(caller.user_id)


@cart_router.delete("/items/{item_id}", response_model=CartResponse)
async def remove_cart_item(item_id: str, caller: Caller = Depends(current_caller)) -> CartResponse:
    dispatch(RemoveFromCart(user_id=caller.user_id, item_id=item_id), cart_locks, caller.user_id)
    return _cart_of(caller.user_id)


@cart_router.delete("", response_model=CartResponse)
async def clear_cart(caller: Caller = Depends(current_caller)) -> CartResponse:
    dispatch(ClearCart(user_id=caller.user_id), cart_locks, caller.user_id)
    return _cart_of(caller.user_id)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("/checkout", status_code=201, response_model=OrderResponse)
async def checkout(body: CheckoutRequest, caller: Caller = Depends(current_caller)) -> OrderResponse:
    address = body.shipping_address.model_dump() if body.shipping_address else {}
    command = PlaceOrder(
        user_id=caller.user_id,
        shipping_address=json.dumps(address),
        payment_method=body.payment_method,
        notes=body.notes,
    )
    order_id = dispatch(command, cart_locks, caller.user_id)
    return order_response(queries.order_for_caller(order_id, caller.user_id))


@order_router.get("", response_model=list[OrderResponse])
async def list_my_orders(caller: Caller = Depends(current_caller)) -> list[OrderResponse]:
    return [order_response(order) for order in queries.orders_for_user(caller.user_id)]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, caller: Caller = Depends(current_caller)) -> OrderResponse:
    return order_response(queries.order_for_caller(order_id, caller.user_id, caller.is_admin))


@order_router.put("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(order_id: str, caller: Caller = Depends(current_caller)) -> OrderResponse:
    dispatch(CancelOrder(order_id=order_id, user_id=caller.user_id), order_locks, order_id)
    return order_response(queries.order_for_caller(order_id, caller.user_id, caller.is_admin))


# ---------------------------------------------------------------------------
# Admin Router
# ---------------------------------------------------------------------------
admin_router = APIRouter(prefix="/admin", tags=["admin"])


@admin_router.put("/orders/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str, body: UpdateOrderStatusRequest, caller: Caller = Depends(require_admin)
) -> OrderResponse:
    command = UpdateOrderStatus(
        order_id=order_id,
        status=body.status,
        changed_by=caller.user_id,
    )
    dispatch(command, order_locks, order_id)
    return order_response(queries.order_for_caller(order_id, caller.user_id, is_admin=True))


@admin_router.put("/orders/{order_id}/payment", response_model=OrderResponse)
async def record_payment(order_id: str, caller: Caller = Depends(require_admin)) -> OrderResponse:
    dispatch(RecordPayment(order_id=order_id), order_locks, order_id)
    return order_response(queries.order_for_caller(order_id, caller.user_id, is_admin=True))


@admin_router.get("/orders", response_model=list[OrderResponse])
async def list_all_orders(status: str | None = None, caller: Caller = Depends(require_admin)) -> list[OrderResponse]:
    return [order_response(order) for order in queries.all_orders(caller.is_admin, status=status)]


@admin_router.get("/stats", response_model=StatsResponse)
async def stats(caller: Caller = Depends(require_admin)) -> StatsResponse:  # noqa: ARG001
    return StatsResponse(**queries.dashboard_stats())


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.post("", status_code=201, response_model=ProductResponse)
async def add_product(body: CreateProductRequest, caller: Caller = Depends(require_vendor)) -> ProductResponse:
    command = AddProduct(
        vendor_id=caller.user_id,
        name=body.name,
        description=body.description,
        price=body.price,
        category=body.category,
        images=json.dumps(body.images),
    )
    product_id = dispatch(command)
    return product_response(load_product(product_id))


@product_router.get("", response_model=list[ProductResponse])
async def list_products(
    category: str | None = None,
    vendor_id: str | None = None,
    available: bool = False,
) -> list[ProductResponse]:
    products = current_domain.repository_for(Product).listing(
        category=category,
        vendor_id=vendor_id,
        available_only=available,
    )
    return [product_response(product) for product in products]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    return product_response(load_product(product_id))


@product_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str, body: UpdateProductRequest, caller: Caller = Depends(require_vendor)
) -> ProductResponse:
    command = UpdateProduct(
        product_id=product_id,
        caller_id=caller.user_id,
        caller_is_admin=caller.is_admin,
        name=body.name,
        description=body.description,
        price=body.price,
        category=body.category,
        images=json.dumps(body.images) if body.images is not None else None,
    )
    dispatch(command)
    return product_response(load_product(product_id))


@product_router.put("/{product_id}/availability", response_model=ProductResponse)
async def set_product_availability(
    product_id: str, body: SetAvailabilityRequest, caller: Caller = Depends(require_vendor)
) -> ProductResponse:
    command = SetProductAvailability(
        product_id=product_id,
        caller_id=caller.user_id,
        caller_is_admin=caller.is_admin,
        is_available=body.is_available,
    )
    dispatch(command)
    return product_response(load_product(product_id))


@product_router.delete("/{product_id}")
async def delete_product(product_id: str, caller: Caller = Depends(require_vendor)) -> dict:
    command = DeleteProduct(
        product_id=product_id,
        caller_id=caller.user_id,
        caller_is_admin=caller.is_admin,
    )
    dispatch(command)
    return {"id": product_id, "message": "Product removed"}
