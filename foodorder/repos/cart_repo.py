# foodorder/repos/cart_repo.py
import uuid
from typing import Callable

import redis
from redis.exceptions import WatchError

from foodorder.domain.schemas import Cart
from foodorder.utils.retry import redis_retry, cas_retry
from foodorder.utils.settings import CART_TTL_SECONDS
from foodorder.utils.logging import get_logger

logger = get_logger(__name__)


class CartRepo:
    """
    Koszyk klienta w redisie pod kluczem cart:{customer_id}.
    Zawsze zapisujemy caly obiekt z odswiezonym TTL, nie ma czesciowych update'ow.
    """

    def __init__(self, cache: redis.Redis, ttl: int = CART_TTL_SECONDS):
        self.cache = cache
        self.ttl = ttl

    @staticmethod
    def key(customer_id: int) -> str:
        return f"cart:{customer_id}"

    @staticmethod
    def new_cart(customer_id: int) -> Cart:
        return Cart(cart_id=str(uuid.uuid4()), customer_id=customer_id)

    @redis_retry()
    def get(self, customer_id: int) -> Cart | None:
        raw = self.cache.get(self.key(customer_id))
        if raw is None:
            return None
        return Cart.model_validate_json(raw)

    @redis_retry()
    def create(self, cart: Cart) -> Cart | None:
        """SET NX - None jesli koszyk juz istnieje (np. zapisal go rownolegly mutate)."""
        cart.recalculate()
        created = self.cache.set(
            self.key(cart.customer_id), cart.model_dump_json(), ex=self.ttl, nx=True
        )
        return cart if created else None

    def mutate(self, customer_id: int, change: Callable[[Cart], None]) -> Cart:
        """
        Read-modify-write z WATCH/MULTI/EXEC.
        Jesli ktos zapisal koszyk miedzy odczytem a EXEC -> WatchError,
        cas_retry powtarza cala operacje na swiezej wartosci.
        """
        try:
            return self._mutate(customer_id, change)
        except WatchError:
            logger.error(f"Koszyk klienta {customer_id}: konflikt zapisu po kolejnych probach")
            raise RuntimeError("Konflikt wspolbieznosci - koszyk zostal zmodyfikowany przez inna operacje")

    @cas_retry()
    def _mutate(self, customer_id: int, change: Callable[[Cart], None]) -> Cart:
        key = self.key(customer_id)

        with self.cache.pipeline() as pipe:
            pipe.watch(key)
            raw = pipe.get(key)
            cart = Cart.model_validate_json(raw) if raw else self.new_cart(customer_id)

            #wyjatek z change (np. brak pozycji) przerywa bez zapisu
            change(cart)
            cart.recalculate()

            pipe.multi()
            pipe.set(key, cart.model_dump_json(), ex=self.ttl)
            pipe.execute()

        return cart
