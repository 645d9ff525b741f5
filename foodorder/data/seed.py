# foodorder/data/seed.py
import os

from sqlalchemy.orm import Session

from foodorder.data.database import SessionLocal, init_db
from foodorder.data.models.account import AccountModel, AccountRoleModel, RoleType
from foodorder.repos.account_repo import AccountRepo
from foodorder.services.auth_service import pwd_context
from foodorder.utils.logging import get_logger

logger = get_logger(__name__)


def seed_admin(db: Session, username: str, email: str, password: str) -> AccountModel:
    #admin nie moze sie zarejestrowac przez API, zakladamy go tutaj
    repo = AccountRepo(db)
    existing = repo.get_by_username(username)
    if existing:
        return existing

    account = AccountModel(
        username=username,
        email=email,
        password=pwd_context.hash(password),
        roles=[AccountRoleModel(role_type=RoleType.ADMIN, description="seed")],
    )
    created = repo.create_account(account)
    logger.info(f"Seeded admin account {created.id}")
    return created


def seed():
    init_db()
    db = SessionLocal()
    try:
        seed_admin(
            db,
            username=os.getenv("ADMIN_USERNAME", "admin"),
            email=os.getenv("ADMIN_EMAIL", "admin@foodorder.local"),
            password=os.environ["ADMIN_PASSWORD"],
        )
    finally:
        db.close()


if __name__ == "__main__":
    seed()
