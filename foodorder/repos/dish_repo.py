# foodorder/repos/dish_repo.py
from sqlalchemy import select, func
from sqlalchemy.orm import Session, selectinload

from foodorder.data.models.dish import DishModel


class DishRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_dish(self, dish_id: int) -> DishModel | None:
        return self.db.execute(
            select(DishModel)
            .where(DishModel.id == dish_id)
            .options(selectinload(DishModel.category))
        ).scalar_one_or_none()

    def list_dishes(
        self,
        page: int,
        limit: int,
        restaurant_id: int | None = None,
        category_id: int | None = None,
    ) -> tuple[list[DishModel], int]:
        stmt = select(DishModel)
        count_stmt = select(func.count(DishModel.id))

        if restaurant_id is not None:
            stmt = stmt.where(DishModel.restaurant_id == restaurant_id)
            count_stmt = count_stmt.where(DishModel.restaurant_id == restaurant_id)
        if category_id is not None:
            stmt = stmt.where(DishModel.category_id == category_id)
            count_stmt = count_stmt.where(DishModel.category_id == category_id)

        total = self.db.execute(count_stmt).scalar_one()
        items = self.db.execute(
            stmt.order_by(DishModel.id).offset(page * limit).limit(limit)
        ).scalars().all()
        return list(items), total

    def save(self, dish: DishModel) -> DishModel:
        self.db.add(dish)
        self.db.commit()
        self.db.refresh(dish)
        return dish

    def save_all(self, dishes: list[DishModel]) -> list[DishModel]:
        self.db.add_all(dishes)
        self.db.commit()
        for dish in dishes:
            self.db.refresh(dish)
        return dishes

    def delete(self, dish: DishModel) -> None:
        try:
            self.db.delete(dish)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
