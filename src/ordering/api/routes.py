"""FastAPI routes for the Ordering domain.

Thin adapters: resolve the caller, hand the request to the domain services
and shape the result. Errors are mapped by ordering.api.errors.
"""

from typing import Any

import structlog
from fastapi import APIRouter, Body, Depends

from ordering.api.auth import current_actor
from ordering.api.schemas import (
    ChangeStatusRequest,
    ErrorResponse,
    OrderResponse,
    OrderUpdateResponse,
    PlaceOrderRequest,
)
from ordering.auth import Actor
from ordering.order.creation import OrderCreationService
from ordering.order.lifecycle import OrderLifecycle
from ordering.order.queries import OrderQueries

logger = structlog.get_logger(__name__)

order_router = APIRouter(
    prefix="/orders",
    tags=["orders"],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


def _place_request(body: Any) -> PlaceOrderRequest:
    """Read a creation body leniently. Anything but a JSON object reads as empty."""
    return PlaceOrderRequest.model_validate(body if isinstance(body, dict) else {})


def _requested_status(body: Any) -> Any:
    return ChangeStatusRequest.model_validate(body if isinstance(body, dict) else {}).status


# ---------------------------------------------------------------------------
# Creation
# ---------------------------------------------------------------------------
@order_router.post("/cash", status_code=201, response_model=OrderResponse)
async def create_cash_order(body: Any = Body(default=None), actor: Actor | None = Depends(current_actor)) -> dict:
    body = _place_request(body)
    logger.debug("Cash order requested", body=body.model_dump(by_alias=True))
    order = OrderCreationService().place_cash_order(
        actor,
        items=body.items,
        address=body.shipping_address,
        shipping_fee=body.shipping_fee,
        total_amount=body.total_amount,
        payment_method=body.payment_method,
    )
    return OrderQueries().to_view(order)


@order_router.post("", status_code=201, response_model=OrderResponse)
async def create_order(body: Any = Body(default=None), actor: Actor | None = Depends(current_actor)) -> dict:
    return await create_cash_order(body, actor)


@order_router.post("/vnpay", status_code=201, response_model=OrderResponse)
async def create_vnpay_order(body: Any = Body(default=None), actor: Actor | None = Depends(current_actor)) -> dict:
    body = _place_request(body)
    order = OrderCreationService().place_vnpay_order(
        actor,
        items=body.items,
        address=body.shipping_address,
        shipping_fee=body.shipping_fee,
        total_amount=body.total_amount,
    )
    return OrderQueries().to_view(order)


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------
@order_router.get("/mine", response_model=list[OrderResponse])
async def list_my_orders(status: str | None = None, actor: Actor | None = Depends(current_actor)) -> list[dict]:
    return OrderQueries().list_for_user(actor, status=status)


@order_router.get("", response_model=list[OrderResponse])
async def list_all_orders(
    status: str | None = None,
    sort: str = "desc",
    actor: Actor | None = Depends(current_actor),
) -> list[dict]:
    orders = OrderQueries().list_all(actor, status=status, sort=sort)
    logger.info("Listed orders", count=len(orders), status=status, sort=sort)
    return orders


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order_detail(order_id: str, actor: Actor | None = Depends(current_actor)) -> dict:
    return OrderQueries().get_for(actor, order_id)


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------
@order_router.patch("/{order_id}/status", response_model=OrderUpdateResponse)
async def change_order_status(
    order_id: str,
    body: Any = Body(default=None),
    actor: Actor | None = Depends(current_actor),
) -> dict:
    order = OrderLifecycle().change_status(actor, order_id, _requested_status(body))
    return {"message": "Order status updated.", "order": OrderQueries().to_view(order)}


@order_router.patch("/{order_id}/cancel", response_model=OrderUpdateResponse)
async def cancel_order(order_id: str, actor: Actor | None = Depends(current_actor)) -> dict:
    order = OrderLifecycle().cancel(actor, order_id)
    return {"message": "Order cancelled.", "order": OrderQueries().to_view(order)}
