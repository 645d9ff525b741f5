# foodorder/services/category_service.py
from sqlalchemy.orm import Session

from foodorder.data.models.category import CategoryModel
from foodorder.domain.errors import NotFoundError
from foodorder.domain.schemas import CategoryIn, CategoryOut
from foodorder.repos.category_repo import CategoryRepo
from foodorder.repos.restaurant_repo import RestaurantRepo
from foodorder.utils.logging import get_logger

logger = get_logger(__name__)


class CategoryService:
    def __init__(self, db: Session):
        self.repo = CategoryRepo(db)
        self.restaurant_repo = RestaurantRepo(db)

    def _restaurant_id(self, account_id: int) -> int:
        restaurant = self.restaurant_repo.get_by_account_id(account_id)
        if not restaurant:
            raise NotFoundError("Konto nie ma przypisanej restauracji")
        return restaurant.id

    def _owned(self, category_id: int, account_id: int) -> CategoryModel:
        category = self.repo.get_category(category_id)
        if not category:
            raise NotFoundError(f"Kategoria o ID {category_id} nie istnieje")
        if category.restaurant_id != self._restaurant_id(account_id):
            raise PermissionError("Kategoria nalezy do innej restauracji")
        return category

    def list_for_restaurant(self, restaurant_id: int) -> list[CategoryOut]:
        if not self.restaurant_repo.get_restaurant(restaurant_id):
            raise NotFoundError(f"Restauracja o ID {restaurant_id} nie istnieje")
        return [CategoryOut.model_validate(c) for c in self.repo.list_by_restaurant(restaurant_id)]

    def list_own(self, account_id: int) -> list[CategoryOut]:
        return [
            CategoryOut.model_validate(c)
            for c in self.repo.list_by_restaurant(self._restaurant_id(account_id))
        ]

    def create(self, account_id: int, payload: CategoryIn) -> CategoryOut:
        category = self.repo.save(
            CategoryModel(restaurant_id=self._restaurant_id(account_id), name=payload.name)
        )
        logger.info(f"Category {category.id} created for restaurant {category.restaurant_id}")
        return CategoryOut.model_validate(category)

    def update(self, category_id: int, account_id: int, payload: CategoryIn) -> CategoryOut:
        category = self._owned(category_id, account_id)
        category.name = payload.name
        return CategoryOut.model_validate(self.repo.save(category))

    def delete(self, category_id: int, account_id: int) -> None:
        category = self._owned(category_id, account_id)
        self.repo.delete(category)
        logger.info(f"Category {category_id} deleted")
