#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from foodorder.data.models.account import AccountModel, AccountRoleModel, RoleType
from foodorder.data.models.user import UserModel
from foodorder.data.models.restaurant import RestaurantModel
from foodorder.data.models.category import CategoryModel
from foodorder.data.models.dish import DishModel
from foodorder.data.models.order import OrderModel, OrderStatus
from foodorder.data.models.order_line import OrderLineModel

__all__ = [
    "AccountModel",
    "AccountRoleModel",
    "RoleType",
    "UserModel",
    "RestaurantModel",
    "CategoryModel",
    "DishModel",
    "OrderModel",
    "OrderStatus",
    "OrderLineModel",
]
