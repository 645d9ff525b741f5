# foodorder/api/routers/categories.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from foodorder.api.deps import require_roles
from foodorder.data.database import get_db
from foodorder.data.models.account import AccountModel, RoleType
from foodorder.domain.errors import NotFoundError
from foodorder.domain.schemas import CategoryIn, CategoryOut
from foodorder.services.category_service import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])

restaurant_only = require_roles(RoleType.RESTAURANT)


@router.get("/restaurant/{restaurant_id}", response_model=list[CategoryOut])
def list_for_restaurant(restaurant_id: int, db: Session = Depends(get_db)):
    try:
        return CategoryService(db).list_for_restaurant(restaurant_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("", response_model=list[CategoryOut])
def list_own(account: AccountModel = Depends(restaurant_only), db: Session = Depends(get_db)):
    try:
        return CategoryService(db).list_own(account.id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=CategoryOut, status_code=201)
def create_category(
    payload: CategoryIn,
    account: AccountModel = Depends(restaurant_only),
    db: Session = Depends(get_db),
):
    try:
        return CategoryService(db).create(account.id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{category_id}", response_model=CategoryOut)
def update_category(
    category_id: int,
    payload: CategoryIn,
    account: AccountModel = Depends(restaurant_only),
    db: Session = Depends(get_db),
):
    try:
        return CategoryService(db).update(category_id, account.id, payload)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{category_id}", status_code=204)
def delete_category(
    category_id: int,
    account: AccountModel = Depends(restaurant_only),
    db: Session = Depends(get_db),
):
    try:
        CategoryService(db).delete(category_id, account.id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
