# foodorder/data/models/order_line.py
from sqlalchemy import Column, Integer, Text, Numeric, ForeignKey
from sqlalchemy.orm import relationship

from foodorder.data.database import Base


class OrderLineModel(Base):
    __tablename__ = "order_details"

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False)
    dish_id = Column(Integer, ForeignKey("dishes.id"), nullable=False)

    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)  # cena z koszyka, nie zmienia sie
    note = Column(Text, nullable=True)

    order = relationship("OrderModel", back_populates="lines")
    dish = relationship("DishModel")
