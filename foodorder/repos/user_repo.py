# foodorder/repos/user_repo.py
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from foodorder.data.models.user import UserModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def get_by_account_id(self, account_id: int) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(UserModel.account_id == account_id)
        ).scalar_one_or_none()

    def list_users(self, page: int, limit: int) -> tuple[list[UserModel], int]:
        total = self.db.execute(select(func.count(UserModel.id))).scalar_one()
        users = self.db.execute(
            select(UserModel).order_by(UserModel.id).offset(page * limit).limit(limit)
        ).scalars().all()
        return list(users), total

    def save(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user
