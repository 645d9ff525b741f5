# foodorder/services/dish_service.py
from decimal import Decimal

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from foodorder.data.models.dish import DishModel
from foodorder.domain.errors import NotFoundError
from foodorder.domain.schemas import DishIn, DishUpdateIn, DishOut, Page
from foodorder.repos.category_repo import CategoryRepo
from foodorder.repos.dish_repo import DishRepo
from foodorder.repos.restaurant_repo import RestaurantRepo
from foodorder.utils.logging import get_logger

logger = get_logger(__name__)

FAKE_DISHES = [
    ("Pho bo", Decimal("50000"), "Tradycyjna zupa z wolowina i makaronem ryzowym"),
    ("Bun cha", Decimal("45000"), "Grillowana wieprzowina z makaronem i ziolami"),
    ("Goi cuon", Decimal("30000"), "Sajgonki z krewetkami, wieprzowina i ziolami"),
    ("Com tam", Decimal("40000"), "Lamany ryz z grillowanym kotletem"),
    ("Banh mi", Decimal("25000"), "Bagietka z pasztetem, miesem i warzywami"),
]


class DishService:
    def __init__(self, db: Session):
        self.repo = DishRepo(db)
        self.category_repo = CategoryRepo(db)
        self.restaurant_repo = RestaurantRepo(db)

    def _restaurant_id(self, account_id: int) -> int:
        restaurant = self.restaurant_repo.get_by_account_id(account_id)
        if not restaurant:
            raise NotFoundError("Konto nie ma przypisanej restauracji")
        return restaurant.id

    def _check_category(self, category_id: int | None, restaurant_id: int) -> None:
        if category_id is None:
            return
        category = self.category_repo.get_category(category_id)
        if not category:
            raise NotFoundError(f"Kategoria o ID {category_id} nie istnieje")
        if category.restaurant_id != restaurant_id:
            raise ValueError("Kategoria nie nalezy do twojej restauracji")

    def _owned(self, dish_id: int, account_id: int) -> DishModel:
        dish = self.repo.get_dish(dish_id)
        if not dish:
            raise NotFoundError(f"Danie o ID {dish_id} nie istnieje")
        if dish.restaurant_id != self._restaurant_id(account_id):
            raise PermissionError("Danie nalezy do innej restauracji")
        return dish

    #query
    def get_dish(self, dish_id: int) -> DishOut:
        dish = self.repo.get_dish(dish_id)
        if not dish:
            raise NotFoundError(f"Danie o ID {dish_id} nie istnieje")
        return DishOut.model_validate(dish)

    def list_dishes(self, page: int, limit: int) -> Page[DishOut]:
        items, total = self.repo.list_dishes(page, limit)
        return Page[DishOut].build([DishOut.model_validate(d) for d in items], total, page, limit)

    def list_by_restaurant(self, restaurant_id: int, page: int, limit: int) -> Page[DishOut]:
        if not self.restaurant_repo.get_restaurant(restaurant_id):
            raise NotFoundError(f"Restauracja o ID {restaurant_id} nie istnieje")
        items, total = self.repo.list_dishes(page, limit, restaurant_id=restaurant_id)
        return Page[DishOut].build([DishOut.model_validate(d) for d in items], total, page, limit)

    def list_by_category(self, category_id: int, page: int, limit: int) -> Page[DishOut]:
        if not self.category_repo.get_category(category_id):
            raise NotFoundError(f"Kategoria o ID {category_id} nie istnieje")
        items, total = self.repo.list_dishes(page, limit, category_id=category_id)
        return Page[DishOut].build([DishOut.model_validate(d) for d in items], total, page, limit)

    #commands
    def create_dish(self, account_id: int, payload: DishIn) -> DishOut:
        restaurant_id = self._restaurant_id(account_id)
        self._check_category(payload.category_id, restaurant_id)

        dish = self.repo.save(DishModel(restaurant_id=restaurant_id, **payload.model_dump()))
        logger.info(f"Dish {dish.id} created for restaurant {restaurant_id}")
        return DishOut.model_validate(dish)

    def update_dish(self, dish_id: int, account_id: int, payload: DishUpdateIn) -> DishOut:
        dish = self._owned(dish_id, account_id)
        changes = payload.model_dump(exclude_unset=True)

        if "category_id" in changes:
            self._check_category(changes["category_id"], dish.restaurant_id)

        for field, value in changes.items():
            setattr(dish, field, value)

        #koszyki trzymaja stara cene do ponownego dodania dania
        saved = self.repo.save(dish)
        logger.info(f"Dish {dish_id} updated: {sorted(changes)}")
        return DishOut.model_validate(saved)

    def delete_dish(self, dish_id: int, account_id: int) -> None:
        dish = self._owned(dish_id, account_id)
        try:
            self.repo.delete(dish)
        except IntegrityError:
            raise ValueError("Danie wystepuje w zamowieniach i nie moze byc usuniete")
        logger.info(f"Dish {dish_id} deleted")

    def seed_fake_dishes(self, account_id: int) -> list[DishOut]:
        restaurant_id = self._restaurant_id(account_id)
        dishes = self.repo.save_all(
            [
                DishModel(restaurant_id=restaurant_id, name=name, price=price, description=desc)
                for name, price, desc in FAKE_DISHES
            ]
        )
        logger.info(f"Seeded {len(dishes)} dishes for restaurant {restaurant_id}")
        return [DishOut.model_validate(d) for d in dishes]
