# foodorder/api/routers/restaurants.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from foodorder.api.deps import require_roles
from foodorder.data.database import get_db
from foodorder.data.models.account import AccountModel, RoleType
from foodorder.domain.errors import NotFoundError
from foodorder.domain.schemas import RestaurantOut, RestaurantDetailOut, RestaurantUpdateIn, Page
from foodorder.services.restaurant_service import RestaurantService

router = APIRouter(prefix="/restaurants", tags=["restaurants"])


@router.get("", response_model=Page[RestaurantOut])
def list_restaurants(
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=100),
    search: str | None = Query(None, max_length=255),
    db: Session = Depends(get_db),
):
    return RestaurantService(db).list_restaurants(page, size, search)


@router.get("/profile", response_model=RestaurantOut)
def get_profile(
    account: AccountModel = Depends(require_roles(RoleType.RESTAURANT)),
    db: Session = Depends(get_db),
):
    try:
        return RestaurantService(db).get_current(account.id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/profile", response_model=RestaurantOut)
def update_profile(
    payload: RestaurantUpdateIn,
    account: AccountModel = Depends(require_roles(RoleType.RESTAURANT)),
    db: Session = Depends(get_db),
):
    try:
        return RestaurantService(db).update_current(account.id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{restaurant_id}", response_model=RestaurantDetailOut)
def get_restaurant(restaurant_id: int, db: Session = Depends(get_db)):
    try:
        return RestaurantService(db).get_detail(restaurant_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
