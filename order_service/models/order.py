"""
Order model for database operations
"""

from sqlalchemy import Column, Integer, String, Numeric
from order_service.database import Base, ORDER_TABLE

class Order(Base):
    """Order entity model"""
    __tablename__ = ORDER_TABLE

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_number = Column("orderNumber", String(50), nullable=False)
    customer_name = Column("customerName", String(100), nullable=False, index=True)
    total_value = Column("totalValue", Numeric(10, 2, asdecimal=False), nullable=False)

    def __repr__(self):
        return f"<Order(id={self.id}, order_number='{self.order_number}', customer_name='{self.customer_name}')>"
