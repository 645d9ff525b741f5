# foodorder/repos/order_repo.py
from sqlalchemy import select, func
from sqlalchemy.orm import Session, selectinload

from foodorder.data.models.order import OrderModel
from foodorder.data.models.order_line import OrderLineModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def _with_relations(self, stmt):
        return stmt.options(
            selectinload(OrderModel.user),
            selectinload(OrderModel.restaurant),
            selectinload(OrderModel.lines).selectinload(OrderLineModel.dish),
        )

    def create_order(self, order: OrderModel, lines: list[OrderLineModel]) -> OrderModel:
        """
        Zamowienie + pozycje w jednej transakcji.
        Blad na dowolnym insercie -> rollback calosci, wyjatek idzie wyzej.
        """
        try:
            self.db.add(order)
            self.db.flush()

            for line in lines:
                line.order_id = order.id
                self.db.add(line)

            self.db.flush()
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        return order

    def get_order(self, order_id: int) -> OrderModel | None:
        #populate_existing - po commicie chcemy swieze relacje, nie to co siedzi w sesji
        return self.db.execute(
            self._with_relations(select(OrderModel).where(OrderModel.id == order_id))
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def list_orders(
        self,
        page: int,
        limit: int,
        user_id: int | None = None,
        restaurant_id: int | None = None,
    ) -> tuple[list[OrderModel], int]:
        stmt = select(OrderModel)
        count_stmt = select(func.count(OrderModel.id))

        if user_id is not None:
            stmt = stmt.where(OrderModel.user_id == user_id)
            count_stmt = count_stmt.where(OrderModel.user_id == user_id)
        if restaurant_id is not None:
            stmt = stmt.where(OrderModel.restaurant_id == restaurant_id)
            count_stmt = count_stmt.where(OrderModel.restaurant_id == restaurant_id)

        total = self.db.execute(count_stmt).scalar_one()
        orders = self.db.execute(
            self._with_relations(stmt)
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            .offset(page * limit)
            .limit(limit)
        ).scalars().all()
        return list(orders), total

    def update_order_status(self, order: OrderModel, status: str) -> OrderModel:
        order.status = status
        self.db.commit()
        return self.get_order(order.id)
