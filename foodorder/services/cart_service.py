# foodorder/services/cart_service.py
from sqlalchemy.orm import Session
import redis

from foodorder.domain.errors import NotFoundError
from foodorder.domain.schemas import Cart, CartLine
from foodorder.repos.cart_repo import CartRepo
from foodorder.repos.dish_repo import DishRepo
from foodorder.utils.settings import CART_SINGLE_RESTAURANT
from foodorder.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Use case'y koszyka klienta.
    Koszyk zyje w redisie, dania (cena, nazwa, restauracja) czytamy z bazy.
    query (get) tylko odczyt / tworzy pusty koszyk
    commands (add, update, remove, clear) zapisuja caly koszyk z nowym TTL
    """

    def __init__(
        self,
        db: Session,
        cache: redis.Redis,
        single_restaurant: bool = CART_SINGLE_RESTAURANT,
    ):
        self.repo = CartRepo(cache)
        self.dish_repo = DishRepo(db)
        self.single_restaurant = single_restaurant

    #query
    def get_cart(self, customer_id: int) -> Cart:
        cart = self.repo.get(customer_id)

        if cart is None:
            created = self.repo.create(self.repo.new_cart(customer_id))
            if created is None:
                #ktos zapisal koszyk miedzy odczytem a zapisem, bierzemy jego wersje
                return self.repo.get(customer_id) or self.repo.new_cart(customer_id)
            cart = created
            logger.info(f"Utworzono nowy koszyk {cart.cart_id} dla klienta {customer_id}")

        return cart

    #commands
    def add_line(self, customer_id: int, dish_id: int, quantity: int = 1) -> Cart:
        if quantity < 1:
            raise ValueError("Ilosc musi byc wieksza niz 0")

        dish = self.dish_repo.get_dish(dish_id)
        if not dish:
            raise NotFoundError(f"Danie o ID {dish_id} nie istnieje")

        #snapshot z katalogu w momencie dodania
        snapshot = {
            "price": dish.price,
            "name": dish.name,
            "thumbnail": dish.thumbnail,
            "category": dish.category.name if dish.category else None,
            "restaurant_id": dish.restaurant_id,
        }

        def change(cart: Cart) -> None:
            if self.single_restaurant:
                others = {l.restaurant_id for l in cart.items if l.dish_id != dish_id}
                if others and others != {dish.restaurant_id}:
                    raise ValueError("Koszyk moze zawierac dania tylko z jednej restauracji")

            line = cart.find_line(dish_id)
            if line:
                logger.info(
                    f"Danie {dish_id} juz jest w koszyku, zwiekszam ilosc "
                    f"z {line.quantity} do {line.quantity + quantity}"
                )
                line.quantity += quantity
                for field, value in snapshot.items():
                    setattr(line, field, value)
            else:
                cart.items.append(CartLine(dish_id=dish_id, quantity=quantity, **snapshot))

        cart = self.repo.mutate(customer_id, change)
        logger.info(f"Danie {dish_id} x{quantity} dodane do koszyka klienta {customer_id}")
        return cart

    def update_line_quantity(self, customer_id: int, dish_id: int, quantity: int) -> Cart:
        if quantity < 1:
            raise ValueError("Ilosc musi byc wieksza niz 0")

        def change(cart: Cart) -> None:
            line = cart.find_line(dish_id)
            if not line:
                raise NotFoundError(f"Danie o ID {dish_id} nie jest w koszyku")
            #cena zostaje ta z momentu dodania
            line.quantity = quantity

        cart = self.repo.mutate(customer_id, change)
        logger.info(f"Ilosc dania {dish_id} w koszyku klienta {customer_id} ustawiona na {quantity}")
        return cart

    def remove_line(self, customer_id: int, dish_id: int) -> Cart:
        def change(cart: Cart) -> None:
            cart.items = [l for l in cart.items if l.dish_id != dish_id]

        cart = self.repo.mutate(customer_id, change)
        logger.info(f"Danie {dish_id} usuniete z koszyka klienta {customer_id}")
        return cart

    def clear(self, customer_id: int) -> Cart:
        def change(cart: Cart) -> None:
            cart.items = []

        cart = self.repo.mutate(customer_id, change)
        logger.info(f"Koszyk klienta {customer_id} wyczyszczony")
        return cart

    def remove_ordered(self, customer_id: int, ordered: list[CartLine]) -> Cart:
        """
        Po zamowieniu zdejmuje z koszyka tylko zamowione ilosci.
        Pozycje dodane w trakcie checkoutu zostaja w koszyku.
        """
        taken = {l.dish_id: l.quantity for l in ordered}

        def change(cart: Cart) -> None:
            remaining = []
            for line in cart.items:
                line.quantity -= taken.get(line.dish_id, 0)
                if line.quantity > 0:
                    remaining.append(line)
            cart.items = remaining

        cart = self.repo.mutate(customer_id, change)
        logger.info(f"Z koszyka klienta {customer_id} zdjeto {len(taken)} zamowionych pozycji")
        return cart
