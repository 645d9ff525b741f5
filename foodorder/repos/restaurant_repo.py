# foodorder/repos/restaurant_repo.py
from sqlalchemy import select, func
from sqlalchemy.orm import Session, selectinload

from foodorder.data.models.restaurant import RestaurantModel


class RestaurantRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_restaurant(self, restaurant_id: int) -> RestaurantModel | None:
        return self.db.get(RestaurantModel, restaurant_id)

    def get_with_menu(self, restaurant_id: int) -> RestaurantModel | None:
        return self.db.execute(
            select(RestaurantModel)
            .where(RestaurantModel.id == restaurant_id)
            .options(
                selectinload(RestaurantModel.dishes),
                selectinload(RestaurantModel.categories),
            )
        ).scalar_one_or_none()

    def get_by_account_id(self, account_id: int) -> RestaurantModel | None:
        return self.db.execute(
            select(RestaurantModel).where(RestaurantModel.account_id == account_id)
        ).scalar_one_or_none()

    def list_restaurants(
        self, page: int, size: int, search: str | None = None
    ) -> tuple[list[RestaurantModel], int]:
        stmt = select(RestaurantModel)
        count_stmt = select(func.count(RestaurantModel.id))

        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(RestaurantModel.name.ilike(pattern))
            count_stmt = count_stmt.where(RestaurantModel.name.ilike(pattern))

        total = self.db.execute(count_stmt).scalar_one()
        items = self.db.execute(
            stmt.order_by(RestaurantModel.id).offset(page * size).limit(size)
        ).scalars().all()
        return list(items), total

    def save(self, restaurant: RestaurantModel) -> RestaurantModel:
        self.db.add(restaurant)
        self.db.commit()
        self.db.refresh(restaurant)
        return restaurant
