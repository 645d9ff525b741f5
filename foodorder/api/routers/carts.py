# foodorder/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
import redis

from foodorder.api.deps import get_current_customer_id
from foodorder.data.cache import get_cache
from foodorder.data.database import get_db
from foodorder.domain.errors import NotFoundError
from foodorder.domain.schemas import Cart, UpdateCartItemIn
from foodorder.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session, cache: redis.Redis):
    return CartService(db=db, cache=cache)


@router.get("", response_model=Cart)
def get_cart(
    customer_id: int = Depends(get_current_customer_id),
    db: Session = Depends(get_db),
    cache: redis.Redis = Depends(get_cache),
):
    return get_service(db, cache).get_cart(customer_id)


@router.delete("", response_model=Cart)
def clear_cart(
    customer_id: int = Depends(get_current_customer_id),
    db: Session = Depends(get_db),
    cache: redis.Redis = Depends(get_cache),
):
    try:
        return get_service(db, cache).clear(customer_id)
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/{dish_id}", response_model=Cart)
def add_dish(
    dish_id: int,
    quantity: int = Query(1),
    customer_id: int = Depends(get_current_customer_id),
    db: Session = Depends(get_db),
    cache: redis.Redis = Depends(get_cache),
):
    svc = get_service(db, cache)
    try:
        return svc.add_line(customer_id, dish_id, quantity)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.patch("/item/{dish_id}", response_model=Cart)
def update_item(
    dish_id: int,
    payload: UpdateCartItemIn,
    customer_id: int = Depends(get_current_customer_id),
    db: Session = Depends(get_db),
    cache: redis.Redis = Depends(get_cache),
):
    svc = get_service(db, cache)
    try:
        return svc.update_line_quantity(customer_id, dish_id, payload.quantity)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.delete("/{dish_id}", response_model=Cart)
def remove_item(
    dish_id: int,
    customer_id: int = Depends(get_current_customer_id),
    db: Session = Depends(get_db),
    cache: redis.Redis = Depends(get_cache),
):
    try:
        return get_service(db, cache).remove_line(customer_id, dish_id)
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))
