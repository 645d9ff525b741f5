# foodorder/api/routers/users.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from foodorder.api.deps import require_roles
from foodorder.data.database import get_db
from foodorder.data.models.account import AccountModel, RoleType
from foodorder.domain.errors import NotFoundError
from foodorder.domain.schemas import UserOut, UserUpdateIn, Page
from foodorder.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/admin/list", response_model=Page[UserOut])
def list_users(
    page: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
    account: AccountModel = Depends(require_roles(RoleType.ADMIN)),
    db: Session = Depends(get_db),
):
    return UserService(db).list_users(page, limit)


@router.get("/profile", response_model=UserOut)
def get_profile(
    account: AccountModel = Depends(require_roles(RoleType.CUSTOMER)),
    db: Session = Depends(get_db),
):
    service = UserService(db)
    try:
        return service.get_current_user(account.id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/profile", response_model=UserOut)
def update_profile(
    payload: UserUpdateIn,
    account: AccountModel = Depends(require_roles(RoleType.CUSTOMER)),
    db: Session = Depends(get_db),
):
    service = UserService(db)
    try:
        return service.update_profile(account.id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
