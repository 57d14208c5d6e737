"""
Pydantic schemas for Order operations
"""

from pydantic import BaseModel, Field
from typing import Optional

from order_service.models.order import Order

class OrderCreate(BaseModel):
    """Validated fields for a new order"""
    order_number: str = Field(..., alias="orderNumber")
    customer_name: str = Field(..., alias="customerName")
    total_value: float = Field(..., alias="totalValue")

    class Config:
        populate_by_name = True

class OrderPatch(BaseModel):
    """Validated subset of order fields for an update; unset fields are left alone"""
    order_number: Optional[str] = Field(None, alias="orderNumber")
    customer_name: Optional[str] = Field(None, alias="customerName")
    total_value: Optional[float] = Field(None, alias="totalValue")

    class Config:
        populate_by_name = True

    def apply_to(self, order: Order) -> Order:
        """Overlay the provided fields onto an existing order"""
        if self.order_number is not None:
            order.order_number = self.order_number
        if self.customer_name is not None:
            order.customer_name = self.customer_name
        if self.total_value is not None:
            order.total_value = self.total_value
        return order

class OrderResponse(BaseModel):
    """Schema for order responses"""
    id: int
    order_number: str = Field(..., alias="orderNumber")
    customer_name: str = Field(..., alias="customerName")
    total_value: float = Field(..., alias="totalValue")

    class Config:
        from_attributes = True
        populate_by_name = True

class OrderListResponse(BaseModel):
    """Paginated envelope for order listings"""
    data: list[OrderResponse]
    current_page: int = Field(..., alias="currentPage")
    total_pages: int = Field(..., alias="totalPages")
    total_items: int = Field(..., alias="totalItems")

    class Config:
        populate_by_name = True

class OrderCountResponse(BaseModel):
    total: int
