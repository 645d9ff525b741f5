# foodorder/services/restaurant_service.py
from sqlalchemy.orm import Session

from foodorder.domain.errors import NotFoundError
from foodorder.domain.schemas import (
    RestaurantOut,
    RestaurantDetailOut,
    RestaurantUpdateIn,
    DishOut,
    CategoryOut,
    Page,
)
from foodorder.repos.restaurant_repo import RestaurantRepo
from foodorder.utils.logging import get_logger

logger = get_logger(__name__)


class RestaurantService:
    def __init__(self, db: Session):
        self.repo = RestaurantRepo(db)

    def list_restaurants(self, page: int, size: int, search: str | None = None) -> Page[RestaurantOut]:
        items, total = self.repo.list_restaurants(page, size, search)
        return Page[RestaurantOut].build(
            [RestaurantOut.model_validate(r) for r in items], total, page, size
        )

    def get_detail(self, restaurant_id: int) -> RestaurantDetailOut:
        restaurant = self.repo.get_with_menu(restaurant_id)
        if not restaurant:
            raise NotFoundError(f"Restauracja o ID {restaurant_id} nie istnieje")

        return RestaurantDetailOut(
            **RestaurantOut.model_validate(restaurant).model_dump(),
            dishes=[DishOut.model_validate(d) for d in restaurant.dishes],
            categories=[CategoryOut.model_validate(c) for c in restaurant.categories],
        )

    def get_current(self, account_id: int) -> RestaurantOut:
        restaurant = self.repo.get_by_account_id(account_id)
        if not restaurant:
            raise NotFoundError("Konto nie ma przypisanej restauracji")
        return RestaurantOut.model_validate(restaurant)

    def update_current(self, account_id: int, payload: RestaurantUpdateIn) -> RestaurantOut:
        restaurant = self.repo.get_by_account_id(account_id)
        if not restaurant:
            raise NotFoundError("Konto nie ma przypisanej restauracji")

        for field, value in payload.model_dump(exclude_unset=True).items():
            setattr(restaurant, field, value)

        saved = self.repo.save(restaurant)
        logger.info(f"Restaurant {saved.id} updated")
        return RestaurantOut.model_validate(saved)
