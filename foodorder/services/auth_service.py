# foodorder/services/auth_service.py
from passlib.context import CryptContext
from sqlalchemy.orm import Session
import redis

from foodorder.data.models.account import AccountModel, AccountRoleModel, RoleType
from foodorder.data.models.restaurant import RestaurantModel
from foodorder.data.models.user import UserModel
from foodorder.domain.errors import NotFoundError
from foodorder.domain.schemas import RegisterIn, TokenOut, AccountOut
from foodorder.repos.account_repo import AccountRepo
from foodorder.services.token_service import TokenService
from foodorder.utils.logging import get_logger

logger = get_logger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def to_account_out(account: AccountModel) -> AccountOut:
    return AccountOut(
        id=account.id,
        username=account.username,
        email=account.email,
        phone=account.phone,
        roles=sorted(account.role_types, key=lambda r: r.value),
    )


class AuthService:
    def __init__(self, db: Session, cache: redis.Redis):
        self.repo = AccountRepo(db)
        self.tokens = TokenService(cache)

    def register(self, payload: RegisterIn) -> AccountOut:
        if payload.role == RoleType.ADMIN:
            raise PermissionError("Nie mozna zarejestrowac konta administratora")

        if self.repo.get_by_username(payload.username):
            raise ValueError("Nazwa uzytkownika jest juz zajeta")

        if self.repo.get_by_email(payload.email):
            raise ValueError("Email jest juz zarejestrowany")

        account = AccountModel(
            username=payload.username,
            email=payload.email,
            password=pwd_context.hash(payload.password),
            phone=payload.phone,
            roles=[AccountRoleModel(role_type=payload.role, is_active=True)],
        )

        if payload.role == RoleType.RESTAURANT:
            profile = RestaurantModel(name=payload.full_name, phone=payload.phone)
        else:
            profile = UserModel(full_name=payload.full_name, phone=payload.phone)

        created = self.repo.create_account(account, profile)
        logger.info(f"Registered account {created.id} ({payload.role.value})")
        return to_account_out(created)

    def login(self, username: str, password: str) -> TokenOut:
        account = self.repo.get_by_username(username)

        if not account or not pwd_context.verify(password, account.password):
            raise PermissionError("Nieprawidlowa nazwa uzytkownika lub haslo")

        roles = account.role_types
        if not roles:
            raise PermissionError("Konto nie ma aktywnych rol")

        token = self.tokens.issue_session(account.id)
        return TokenOut(access_token=token, roles=sorted(roles, key=lambda r: r.value))

    def logout(self, token: str) -> None:
        self.tokens.revoke_session(token)

    def authenticate(self, token: str) -> AccountModel | None:
        account_id = self.tokens.resolve_session(token)
        if account_id is None:
            return None
        return self.repo.get_account(account_id)

    def forgot_password(self, email: str) -> tuple[AccountModel, str]:
        account = self.repo.get_by_email(email)
        if not account:
            raise NotFoundError("Email nie istnieje w systemie")

        otp = self.tokens.issue_otp(account.email)
        return account, otp

    def verify_otp(self, email: str, otp: str) -> None:
        if not self.tokens.check_otp(email, otp):
            raise ValueError("OTP nieprawidlowy lub wygasl")

    def reset_password(self, email: str, otp: str, new_password: str) -> None:
        account = self.repo.get_by_email(email)
        if not account:
            raise NotFoundError("Email nie istnieje w systemie")

        if not self.tokens.consume_otp(email, otp):
            raise ValueError("OTP nieprawidlowy lub wygasl")

        account.password = pwd_context.hash(new_password)
        self.repo.save(account)
        logger.info(f"Password reset for account {account.id}")
