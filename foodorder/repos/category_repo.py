# foodorder/repos/category_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from foodorder.data.models.category import CategoryModel


class CategoryRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_category(self, category_id: int) -> CategoryModel | None:
        return self.db.get(CategoryModel, category_id)

    def list_by_restaurant(self, restaurant_id: int) -> list[CategoryModel]:
        return list(
            self.db.execute(
                select(CategoryModel)
                .where(CategoryModel.restaurant_id == restaurant_id)
                .order_by(CategoryModel.id)
            ).scalars().all()
        )

    def save(self, category: CategoryModel) -> CategoryModel:
        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)
        return category

    def delete(self, category: CategoryModel) -> None:
        try:
            #dania zostaja, tylko bez kategorii
            for dish in category.dishes:
                dish.category_id = None
            self.db.delete(category)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
