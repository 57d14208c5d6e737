"""
Repository for order persistence
"""

from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from order_service.models.order import Order
from order_service.schemas.order import OrderCreate


class OrderRepository:
    """Translates between ``Order`` rows and the session; one instance per request"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, data: OrderCreate) -> Order:
        order = Order(
            order_number=data.order_number,
            customer_name=data.customer_name,
            total_value=data.total_value,
        )
        self.session.add(order)
        await self.session.commit()
        await self.session.refresh(order)
        return order

    async def find_all(self) -> list[Order]:
        result = await self.session.execute(select(Order).order_by(Order.id))
        return list(result.scalars().all())

    async def find_by_id(self, order_id: int) -> Optional[Order]:
        return await self.session.get(Order, order_id)

    async def find_by_customer_name(self, name: str) -> list[Order]:
        """Case-insensitive exact match on the customer name"""
        result = await self.session.execute(
            select(Order)
            .where(func.lower(Order.customer_name) == func.lower(name))
            .order_by(Order.id)
        )
        return list(result.scalars().all())

    async def update(self, order: Order) -> Order:
        self.session.add(order)
        await self.session.commit()
        await self.session.refresh(order)
        return order

    async def delete(self, order_id: int) -> bool:
        """True if a row was removed"""
        result = await self.session.execute(delete(Order).where(Order.id == order_id))
        await self.session.commit()
        return result.rowcount > 0

    async def count(self) -> int:
        total = await self.session.scalar(select(func.count()).select_from(Order))
        return total or 0
