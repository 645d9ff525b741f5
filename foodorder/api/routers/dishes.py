# foodorder/api/routers/dishes.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from foodorder.api.deps import require_roles
from foodorder.data.database import get_db
from foodorder.data.models.account import AccountModel, RoleType
from foodorder.domain.errors import NotFoundError
from foodorder.domain.schemas import DishIn, DishUpdateIn, DishOut, Page
from foodorder.services.dish_service import DishService

router = APIRouter(prefix="/dishes", tags=["dishes"])

restaurant_only = require_roles(RoleType.RESTAURANT)


@router.get("", response_model=Page[DishOut])
def list_dishes(
    page: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return DishService(db).list_dishes(page, limit)


@router.get("/restaurant/{restaurant_id}", response_model=Page[DishOut])
def list_by_restaurant(
    restaurant_id: int,
    page: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    try:
        return DishService(db).list_by_restaurant(restaurant_id, page, limit)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/category/{category_id}", response_model=Page[DishOut])
def list_by_category(
    category_id: int,
    page: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    try:
        return DishService(db).list_by_category(category_id, page, limit)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{dish_id}", response_model=DishOut)
def get_dish(dish_id: int, db: Session = Depends(get_db)):
    try:
        return DishService(db).get_dish(dish_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=DishOut, status_code=201)
def create_dish(
    payload: DishIn,
    account: AccountModel = Depends(restaurant_only),
    db: Session = Depends(get_db),
):
    try:
        return DishService(db).create_dish(account.id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/seed-fake-data", response_model=list[DishOut], status_code=201)
def seed_fake_data(account: AccountModel = Depends(restaurant_only), db: Session = Depends(get_db)):
    try:
        return DishService(db).seed_fake_dishes(account.id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{dish_id}", response_model=DishOut)
def update_dish(
    dish_id: int,
    payload: DishUpdateIn,
    account: AccountModel = Depends(restaurant_only),
    db: Session = Depends(get_db),
):
    try:
        return DishService(db).update_dish(dish_id, account.id, payload)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{dish_id}", status_code=204)
def delete_dish(
    dish_id: int,
    account: AccountModel = Depends(restaurant_only),
    db: Session = Depends(get_db),
):
    try:
        DishService(db).delete_dish(dish_id, account.id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
