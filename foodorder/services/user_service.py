# foodorder/services/user_service.py
from sqlalchemy.orm import Session

from foodorder.domain.errors import NotFoundError
from foodorder.domain.schemas import UserOut, UserUpdateIn, Page
from foodorder.repos.user_repo import UserRepo


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def get_current_user(self, account_id: int) -> UserOut:
        user = self.repo.get_by_account_id(account_id)
        if not user:
            raise NotFoundError(f"Brak profilu klienta dla konta {account_id}")
        return UserOut.model_validate(user)

    def update_profile(self, account_id: int, payload: UserUpdateIn) -> UserOut:
        user = self.repo.get_by_account_id(account_id)
        if not user:
            raise NotFoundError(f"Brak profilu klienta dla konta {account_id}")

        for field, value in payload.model_dump(exclude_unset=True).items():
            setattr(user, field, value)

        return UserOut.model_validate(self.repo.save(user))

    def list_users(self, page: int, limit: int) -> Page[UserOut]:
        users, total = self.repo.list_users(page, limit)
        return Page[UserOut].build([UserOut.model_validate(u) for u in users], total, page, limit)
