# foodorder/services/order_service.py
from sqlalchemy.orm import Session
import redis

from foodorder.data.models.account import AccountModel, RoleType
from foodorder.data.models.order import OrderModel, OrderStatus
from foodorder.data.models.order_line import OrderLineModel
from foodorder.domain.errors import NotFoundError
from foodorder.domain.schemas import OrderOut, Page
from foodorder.repos.dish_repo import DishRepo
from foodorder.repos.order_repo import OrderRepo
from foodorder.repos.restaurant_repo import RestaurantRepo
from foodorder.repos.user_repo import UserRepo
from foodorder.services.cart_service import CartService
from foodorder.utils.logging import get_logger

logger = get_logger(__name__)

#kolejny krok dla restauracji/admina, cancelled tylko przez cancel_order
NEXT_STATUS = {
    OrderStatus.PENDING: OrderStatus.CONFIRMED,
    OrderStatus.CONFIRMED: OrderStatus.PROCESSING,
    OrderStatus.PROCESSING: OrderStatus.DELIVERING,
    OrderStatus.DELIVERING: OrderStatus.COMPLETED,
}


class OrderService:
    """
    Serwis odpowiedzialny za domene zamowien.
    Koszyk czyta przez CartService, zamowienie zapisuje transakcyjnie przez OrderRepo.
    """

    def __init__(self, db: Session, cache: redis.Redis, cart_service: CartService | None = None):
        self.db = db
        self.repo = OrderRepo(db)
        self.user_repo = UserRepo(db)
        self.dish_repo = DishRepo(db)
        self.restaurant_repo = RestaurantRepo(db)
        self.cart_service = cart_service or CartService(db, cache)

    def create_order_from_cart(self, customer_id: int, note: str | None = None) -> OrderOut:
        """
        Use Case: Tworzenie zamowienia z koszyka.

        1. Koszyk nie moze byc pusty
        2. Klient musi istniec
        3. restaurant_id z pierwszego dania w koszyku
        4. Order + pozycje w jednej transakcji (ceny z koszyka, nie z katalogu)
        5. Po commicie zdejmujemy z koszyka zamowione pozycje (reszta zostaje)
        """
        cart = self.cart_service.get_cart(customer_id)

        if not cart.items:
            raise ValueError("Koszyk jest pusty, nie mozna zlozyc zamowienia")

        if not self.user_repo.get_user(customer_id):
            raise NotFoundError(f"Klient o ID {customer_id} nie istnieje")

        first = cart.items[0]
        first_dish = self.dish_repo.get_dish(first.dish_id)
        if not first_dish:
            raise NotFoundError(f"Danie o ID {first.dish_id} nie istnieje")

        restaurant_id = first_dish.restaurant_id

        other = {l.restaurant_id for l in cart.items if l.restaurant_id not in (None, restaurant_id)}
        if other:
            logger.warning(
                f"Koszyk klienta {customer_id} ma dania z restauracji {sorted(other)}, "
                f"zamowienie idzie do restauracji {restaurant_id}"
            )

        order = OrderModel(
            user_id=customer_id,
            restaurant_id=restaurant_id,
            total_price=cart.total_price,
            status=OrderStatus.PENDING.value,
            note=note,
        )
        lines = [
            OrderLineModel(dish_id=l.dish_id, quantity=l.quantity, price=l.price)
            for l in cart.items
        ]

        try:
            created = self.repo.create_order(order, lines)
        except Exception as e:
            #rollback juz zrobiony w repo, koszyk zostaje - klient moze powtorzyc
            logger.error(f"Nie udalo sie utworzyc zamowienia dla klienta {customer_id}: {e}")
            raise

        logger.info(f"Order {created.id} created from cart {cart.cart_id} ({len(lines)} lines)")

        #zamowienie jest juz zapisane - blad przy czyszczeniu koszyka nie moze zwrocic bledu klientowi
        try:
            self.cart_service.remove_ordered(customer_id, cart.items)
        except (RuntimeError, redis.RedisError) as e:
            logger.error(f"Order {created.id} saved, but cart of customer {customer_id} was not cleared: {e}")

        return OrderOut.from_model(self.repo.get_order(created.id))

    def get_order(self, order_id: int, account: AccountModel) -> OrderOut:
        order = self._get_order(order_id)
        roles = account.role_types

        if RoleType.ADMIN in roles:
            return OrderOut.from_model(order)

        if RoleType.CUSTOMER in roles:
            user = self.user_repo.get_by_account_id(account.id)
            if user and order.user_id == user.id:
                return OrderOut.from_model(order)

        if RoleType.RESTAURANT in roles:
            restaurant = self.restaurant_repo.get_by_account_id(account.id)
            if restaurant and order.restaurant_id == restaurant.id:
                return OrderOut.from_model(order)

        raise PermissionError("Brak dostepu do zamowienia")

    def list_all_orders(self, page: int, limit: int) -> Page[OrderOut]:
        orders, total = self.repo.list_orders(page, limit)
        return Page[OrderOut].build([OrderOut.from_model(o) for o in orders], total, page, limit)

    def list_customer_orders(self, customer_id: int, page: int, limit: int) -> Page[OrderOut]:
        orders, total = self.repo.list_orders(page, limit, user_id=customer_id)
        return Page[OrderOut].build([OrderOut.from_model(o) for o in orders], total, page, limit)

    def list_restaurant_orders(self, account_id: int, page: int, limit: int) -> Page[OrderOut]:
        restaurant = self.restaurant_repo.get_by_account_id(account_id)
        if not restaurant:
            raise NotFoundError("Konto nie ma przypisanej restauracji")

        orders, total = self.repo.list_orders(page, limit, restaurant_id=restaurant.id)
        return Page[OrderOut].build([OrderOut.from_model(o) for o in orders], total, page, limit)

    def update_order_status(self, order_id: int, status: OrderStatus, account: AccountModel) -> OrderOut:
        """
        Use Case: Zmiana statusu przez restauracje (tylko swoje zamowienia) albo admina.
        Tylko jeden krok do przodu: pending -> confirmed -> processing -> delivering -> completed.
        """
        order = self._get_order(order_id)
        roles = account.role_types

        if RoleType.ADMIN not in roles:
            restaurant = self.restaurant_repo.get_by_account_id(account.id)
            if not restaurant or order.restaurant_id != restaurant.id:
                raise PermissionError("Brak uprawnien do zmiany statusu tego zamowienia")

        current = OrderStatus(order.status)
        if NEXT_STATUS.get(current) != status:
            raise ValueError(f"Niedozwolona zmiana statusu: {current.value} -> {status.value}")

        updated = self.repo.update_order_status(order, status.value)
        logger.info(f"Order {order_id}: {current.value} -> {status.value}")
        return OrderOut.from_model(updated)

    def cancel_order(self, order_id: int, customer_id: int) -> OrderOut:
        """
        Use Case: Anulowanie przez klienta - tylko wlasne i tylko pending.
        """
        order = self._get_order(order_id)

        if order.user_id != customer_id:
            raise PermissionError("Mozna anulowac tylko wlasne zamowienia")

        if order.status != OrderStatus.PENDING.value:
            raise ValueError("Mozna anulowac tylko zamowienia w statusie pending")

        updated = self.repo.update_order_status(order, OrderStatus.CANCELLED.value)
        logger.info(f"Order {order_id} cancelled by customer {customer_id}")
        return OrderOut.from_model(updated)

    def _get_order(self, order_id: int) -> OrderModel:
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFoundError(f"Zamowienie o ID {order_id} nie istnieje")
        return order
