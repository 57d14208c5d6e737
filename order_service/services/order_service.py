"""
Order service
Thin business layer over the order repository
"""

from typing import Optional
import logging

from order_service.models.order import Order
from order_service.repositories.order_repository import OrderRepository
from order_service.schemas.order import OrderCreate, OrderPatch

logger = logging.getLogger(__name__)

class OrderService:
    """Service for order management operations"""

    def __init__(self, repository: OrderRepository):
        self.repository = repository

    async def create_order(self, data: OrderCreate) -> Order:
        return await self.repository.create(data)

    async def find_all(self) -> list[Order]:
        return await self.repository.find_all()

    async def find_by_id(self, order_id: int) -> Optional[Order]:
        return await self.repository.find_by_id(order_id)

    async def find_by_customer_name(self, name: str) -> list[Order]:
        return await self.repository.find_by_customer_name(name)

    async def update_order(self, order_id: int, patch: OrderPatch) -> Optional[Order]:
        """Merge ``patch`` into the stored order; None if there is no such order"""
        existing_order = await self.repository.find_by_id(order_id)
        if existing_order is None:
            logger.debug(f"Order {order_id} not found for update")
            return None

        patch.apply_to(existing_order)
        return await self.repository.update(existing_order)

    async def delete_order(self, order_id: int) -> bool:
        return await self.repository.delete(order_id)

    async def count_orders(self) -> int:
        return await self.repository.count()
