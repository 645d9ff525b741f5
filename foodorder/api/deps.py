# foodorder/api/deps.py
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
import redis

from foodorder.data.cache import get_cache
from foodorder.data.database import get_db
from foodorder.data.models.account import AccountModel, RoleType
from foodorder.repos.user_repo import UserRepo
from foodorder.services.auth_service import AuthService

bearer_scheme = HTTPBearer(auto_error=False)


def get_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Brak tokenu",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return credentials.credentials


def get_current_account(
    token: str = Depends(get_token),
    db: Session = Depends(get_db),
    cache: redis.Redis = Depends(get_cache),
) -> AccountModel:
    """Zwraca konto z sesji w redisie albo 401."""
    account = AuthService(db, cache).authenticate(token)
    if account is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Nieprawidlowy lub wygasly token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return account


def require_roles(*roles: RoleType):
    """Fabryka zaleznosci: konto musi miec jedna z podanych rol."""

    def _checker(account: AccountModel = Depends(get_current_account)) -> AccountModel:
        if not account.role_types & set(roles):
            raise HTTPException(status_code=403, detail="Niewystarczajace uprawnienia")
        return account

    return _checker


def get_current_customer_id(
    account: AccountModel = Depends(require_roles(RoleType.CUSTOMER)),
    db: Session = Depends(get_db),
) -> int:
    #koszyk i zamowienia sa na id profilu klienta, nie konta
    user = UserRepo(db).get_by_account_id(account.id)
    if not user:
        raise HTTPException(status_code=404, detail="Brak profilu klienta")
    return user.id
