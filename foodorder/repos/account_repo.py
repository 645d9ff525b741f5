# foodorder/repos/account_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from foodorder.data.models.account import AccountModel


class AccountRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_account(self, account_id: int) -> AccountModel | None:
        return self.db.get(AccountModel, account_id)

    def get_by_username(self, username: str) -> AccountModel | None:
        return self.db.execute(
            select(AccountModel).where(AccountModel.username == username)
        ).scalar_one_or_none()

    def get_by_email(self, email: str) -> AccountModel | None:
        return self.db.execute(
            select(AccountModel).where(AccountModel.email == email)
        ).scalar_one_or_none()

    def create_account(self, account: AccountModel, *profiles) -> AccountModel:
        #konto + role + profil (user albo restauracja) w jednym commicie
        try:
            self.db.add(account)
            self.db.flush()
            for profile in profiles:
                profile.account_id = account.id
                self.db.add(profile)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(account)
        return account

    def save(self, account: AccountModel) -> AccountModel:
        self.db.add(account)
        self.db.commit()
        self.db.refresh(account)
        return account
