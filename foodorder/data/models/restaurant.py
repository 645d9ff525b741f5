# foodorder/data/models/restaurant.py
from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship

from foodorder.data.database import Base


class RestaurantModel(Base):
    __tablename__ = "restaurants"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False, unique=True)

    name = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    address = Column(String(255), nullable=True)
    phone = Column(String(20), nullable=True)
    image_url = Column(String(255), nullable=True)

    dishes = relationship("DishModel", back_populates="restaurant")
    categories = relationship("CategoryModel", back_populates="restaurant")
    orders = relationship("OrderModel", back_populates="restaurant")
