# foodorder/domain/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from foodorder.data.models.account import RoleType
from foodorder.data.models.order import OrderStatus

T = TypeVar("T")


# =====================================================
# CART (trzymany w redisie, nie w bazie)
# =====================================================
class CartLine(BaseModel):
    """Pozycja koszyka. Cena to snapshot z momentu dodania."""

    dish_id: int
    quantity: int = Field(..., ge=1)
    price: Decimal
    name: Optional[str] = None
    thumbnail: Optional[str] = None
    category: Optional[str] = None
    restaurant_id: Optional[int] = None


class Cart(BaseModel):
    cart_id: str
    customer_id: int
    items: List[CartLine] = []
    total_items: int = 0
    total_price: Decimal = Decimal("0.00")

    def find_line(self, dish_id: int) -> CartLine | None:
        for line in self.items:
            if line.dish_id == dish_id:
                return line
        return None

    def recalculate(self) -> None:
        self.total_items = sum(line.quantity for line in self.items)
        self.total_price = sum(
            (line.price * line.quantity for line in self.items), Decimal("0.00")
        )


class UpdateCartItemIn(BaseModel):
    quantity: int = Field(..., description="Nowa ilosc (>= 1, sprawdzane w serwisie)")


# =====================================================
# ORDERS
# =====================================================
class OrderCreateIn(BaseModel):
    note: Optional[str] = Field(None, max_length=1000)


class OrderStatusIn(BaseModel):
    status: OrderStatus


class RestaurantSummary(BaseModel):
    id: int
    name: Optional[str] = None
    image_url: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class OrderLineOut(BaseModel):
    id: int
    dish_id: int
    dish_name: str
    dish_thumbnail: Optional[str] = None
    quantity: int
    price: Decimal
    subtotal: Decimal
    note: Optional[str] = None


class OrderOut(BaseModel):
    id: int
    user_id: int
    restaurant_id: int
    status: OrderStatus
    total_price: Decimal
    note: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    restaurant: Optional[RestaurantSummary] = None
    items: List[OrderLineOut] = []
    total_items: int = 0

    @classmethod
    def from_model(cls, order) -> "OrderOut":
        items = [
            OrderLineOut(
                id=line.id,
                dish_id=line.dish_id,
                dish_name=line.dish.name if line.dish else "Unknown",
                dish_thumbnail=line.dish.thumbnail if line.dish else None,
                quantity=line.quantity,
                price=line.price,
                subtotal=line.price * line.quantity,
                note=line.note,
            )
            for line in order.lines
        ]
        return cls(
            id=order.id,
            user_id=order.user_id,
            restaurant_id=order.restaurant_id,
            status=order.status,
            total_price=order.total_price,
            note=order.note,
            created_at=order.created_at,
            updated_at=order.updated_at,
            restaurant=RestaurantSummary.model_validate(order.restaurant) if order.restaurant else None,
            items=items,
            total_items=sum(i.quantity for i in items),
        )


class Page(BaseModel, Generic[T]):
    content: List[T]
    total: int
    page: int
    size: int
    total_pages: int

    @classmethod
    def build(cls, content: List[T], total: int, page: int, size: int) -> "Page[T]":
        total_pages = (total + size - 1) // size if size else 0
        return cls(content=content, total=total, page=page, size=size, total_pages=total_pages)


# =====================================================
# AUTH / ACCOUNTS
# =====================================================
class RegisterIn(BaseModel):
    username: str = Field(..., min_length=3, max_length=255)
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$", max_length=255)
    password: str = Field(..., min_length=6, max_length=128)
    role: RoleType = RoleType.CUSTOMER
    full_name: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=20)


class LoginIn(BaseModel):
    username: str
    password: str


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    roles: List[RoleType]


class ForgotPasswordIn(BaseModel):
    email: str


class VerifyOtpIn(BaseModel):
    email: str
    otp: str = Field(..., min_length=6, max_length=6)


class ResetPasswordIn(VerifyOtpIn):
    new_password: str = Field(..., min_length=6, max_length=128)


class MessageOut(BaseModel):
    message: str


class AccountOut(BaseModel):
    id: int
    username: str
    email: str
    phone: Optional[str] = None
    roles: List[RoleType]


# =====================================================
# USERS
# =====================================================
class UserOut(BaseModel):
    id: int
    account_id: int
    full_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    avatar: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class UserUpdateIn(BaseModel):
    full_name: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = Field(None, max_length=255)


# =====================================================
# CATALOG
# =====================================================
class RestaurantOut(BaseModel):
    id: int
    account_id: int
    name: Optional[str] = None
    description: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    image_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class RestaurantUpdateIn(BaseModel):
    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    address: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=20)


class CategoryIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class CategoryOut(BaseModel):
    id: int
    restaurant_id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class DishIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    description: Optional[str] = None
    thumbnail: Optional[str] = Field(None, max_length=255)
    category_id: Optional[int] = Field(None, gt=0)


class DishUpdateIn(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    price: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    description: Optional[str] = None
    thumbnail: Optional[str] = Field(None, max_length=255)
    category_id: Optional[int] = Field(None, gt=0)


class DishOut(BaseModel):
    id: int
    restaurant_id: int
    category_id: Optional[int] = None
    name: str
    description: Optional[str] = None
    price: Decimal
    thumbnail: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class RestaurantDetailOut(RestaurantOut):
    dishes: List[DishOut] = []
    categories: List[CategoryOut] = []
