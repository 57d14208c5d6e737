"""
Order management endpoints
"""

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import logging
import re

from order_service.database import get_session
from order_service.repositories.order_repository import OrderRepository
from order_service.schemas.order import (
    OrderCreate,
    OrderPatch,
    OrderResponse,
    OrderListResponse,
    OrderCountResponse,
)
from order_service.services.order_service import OrderService
from order_service.utils.error_handler import INTERNAL_ERROR_MESSAGE
from order_service.utils.pagination import paginate, parse_int
from order_service.utils.validation import order_create_body, order_patch_body

logger = logging.getLogger(__name__)

ORDER_ID_PATTERN = re.compile(r"[0-9]+")
MAX_ORDER_ID = 2**63 - 1
ID_OPERATIONS = {"GET": "findById", "PUT": "update", "DELETE": "delete"}

router = APIRouter()

def get_order_service(session: AsyncSession = Depends(get_session)) -> OrderService:
    return OrderService(OrderRepository(session))

def _order_not_found(operation: str, order_id) -> HTTPException:
    logger.error(
        f"Order {order_id} not found",
        extra={"operation": operation, "order_id": order_id},
    )
    return HTTPException(status_code=404, detail="Order not found")

def parse_order_id(request: Request, order_id: str) -> int:
    """Path ids are ASCII digits only, and are checked before touching the store"""
    operation = ID_OPERATIONS.get(request.method, request.method.lower())
    if ORDER_ID_PATTERN.fullmatch(order_id) is None:
        logger.error(
            f"Invalid order ID format: {order_id!r}",
            extra={"operation": operation, "order_id": order_id},
        )
        raise HTTPException(status_code=400, detail="Invalid ID format")

    parsed = int(order_id)
    if parsed > MAX_ORDER_ID:
        # SQLite cannot hold it, so no such row exists
        raise _order_not_found(operation, order_id)
    return parsed

# Literal-prefix routes go first so "/{order_id}" does not shadow them

@router.get("/count/all/orders", response_model=OrderCountResponse)
async def count_orders(service: OrderService = Depends(get_order_service)):
    """Total number of stored orders"""
    try:
        total = await service.count_orders()
        logger.info(f"Counted {total} orders", extra={"operation": "count", "total": total})
        return OrderCountResponse(total=total)

    except Exception as e:
        logger.error(f"Error counting orders: {e}", extra={"operation": "count"}, exc_info=True)
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)

@router.get("/customerName/{name}", response_model=list[OrderResponse])
async def find_orders_by_customer_name(
    name: str,
    service: OrderService = Depends(get_order_service)
):
    """All orders whose customer name equals ``name``, ignoring case"""
    if not name.strip():
        logger.error(
            "Rejected blank customer name",
            extra={"operation": "findByCustomerName", "customer_name": name},
        )
        raise HTTPException(status_code=400, detail="Customer name is required")

    try:
        orders = await service.find_by_customer_name(name)
        logger.info(
            f"Found {len(orders)} orders for customer: {name}",
            extra={"operation": "findByCustomerName", "customer_name": name, "count": len(orders)},
        )
        return orders

    except Exception as e:
        logger.error(
            f"Error fetching orders by name: {e}",
            extra={"operation": "findByCustomerName", "customer_name": name},
            exc_info=True,
        )
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)

@router.post("", response_model=OrderResponse, status_code=201)
async def create_order(
    order: OrderCreate = Depends(order_create_body),
    service: OrderService = Depends(get_order_service)
):
    """Create a new order"""
    try:
        db_order = await service.create_order(order)
        logger.info(
            f"Created order with ID: {db_order.id}",
            extra={"operation": "create", "order_id": db_order.id, "order_number": db_order.order_number},
        )
        return db_order

    except Exception as e:
        logger.error(
            f"Order creation failed: {e}",
            extra={"operation": "create", "order_data": order.model_dump(by_alias=True)},
            exc_info=True,
        )
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)

@router.get("", response_model=OrderListResponse)
async def get_orders(
    request: Request,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    service: OrderService = Depends(get_order_service)
):
    """Get paginated list of orders"""
    try:
        all_orders = await service.find_all()

        default_limit = request.app.state.settings.default_page_limit
        result = paginate(all_orders, parse_int(page, 1), parse_int(limit, default_limit))

        logger.info(
            f"Retrieved page {result.current_page} of {result.total_pages} ({result.total_items} orders)",
            extra={"operation": "findAll", "page": page, "limit": limit},
        )
        return OrderListResponse(
            data=[OrderResponse.model_validate(order) for order in result.data],
            current_page=result.current_page,
            total_pages=result.total_pages,
            total_items=result.total_items,
        )

    except Exception as e:
        logger.error(
            f"Failed to fetch orders: {e}",
            extra={"operation": "findAll", "page": page, "limit": limit},
            exc_info=True,
        )
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)

@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: int = Depends(parse_order_id),
    service: OrderService = Depends(get_order_service)
):
    """Get a specific order by ID"""
    try:
        order = await service.find_by_id(order_id)
        if order is None:
            raise _order_not_found("findById", order_id)

        logger.info(f"Fetched order {order_id}", extra={"operation": "findById", "order_id": order_id})
        return order

    except HTTPException:
        raise
    except Exception as e:
        logger.error(
            f"Error fetching order {order_id}: {e}",
            extra={"operation": "findById", "order_id": order_id},
            exc_info=True,
        )
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)

@router.put("/{order_id}", response_model=OrderResponse)
async def update_order(
    order_id: int = Depends(parse_order_id),
    patch: OrderPatch = Depends(order_patch_body),
    service: OrderService = Depends(get_order_service)
):
    """Update an existing order; fields left out of the body keep their value"""
    try:
        updated_order = await service.update_order(order_id, patch)
        if updated_order is None:
            raise _order_not_found("update", order_id)

        logger.info(
            f"Updated order with ID: {order_id}",
            extra={"operation": "update", "order_id": order_id,
                   "fields": sorted(patch.model_dump(exclude_none=True, by_alias=True))},
        )
        return updated_order

    except HTTPException:
        raise
    except Exception as e:
        logger.error(
            f"Error updating order {order_id}: {e}",
            extra={"operation": "update", "order_id": order_id},
            exc_info=True,
        )
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)

@router.delete("/{order_id}", status_code=204)
async def delete_order(
    order_id: int = Depends(parse_order_id),
    service: OrderService = Depends(get_order_service)
):
    """Delete an order"""
    try:
        deleted = await service.delete_order(order_id)
        if not deleted:
            raise _order_not_found("delete", order_id)

        logger.info(f"Deleted order with ID: {order_id}", extra={"operation": "delete", "order_id": order_id})
        return Response(status_code=204)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(
            f"Error deleting order {order_id}: {e}",
            extra={"operation": "delete", "order_id": order_id},
            exc_info=True,
        )
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)
