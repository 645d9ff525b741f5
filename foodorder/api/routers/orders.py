# foodorder/api/routers/orders.py
from fastapi import APIRouter, Body, Depends, HTTPException, Query
from sqlalchemy.orm import Session
import redis

from foodorder.api.deps import get_current_account, get_current_customer_id, require_roles
from foodorder.data.cache import get_cache
from foodorder.data.database import get_db
from foodorder.data.models.account import AccountModel, RoleType
from foodorder.domain.errors import NotFoundError
from foodorder.domain.schemas import OrderCreateIn, OrderOut, OrderStatusIn, Page
from foodorder.services.notification_service import NotificationService
from foodorder.services.order_service import OrderService
from foodorder.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session, cache: redis.Redis):
    return OrderService(db, cache)


@router.post("", response_model=OrderOut, status_code=201)
def create_order(
    payload: OrderCreateIn | None = Body(None),
    customer_id: int = Depends(get_current_customer_id),
    account: AccountModel = Depends(get_current_account),
    db: Session = Depends(get_db),
    cache: redis.Redis = Depends(get_cache),
):
    """
    Tworzy zamowienie z aktualnego koszyka klienta.
    Wysyla potwierdzenie mailem asynchronicznie.
    """
    svc = get_service(db, cache)
    try:
        order = svc.create_order_from_cart(customer_id, payload.note if payload else None)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    #zamowienie jest juz zapisane - problem z kolejka nie moze go wycofac
    try:
        NotificationService.send_order_confirmation(account.email, order.id, str(order.total_price))
    except Exception as e:
        logger.warning(f"Failed to queue confirmation for order {order.id}: {e}")

    return order


@router.get("", response_model=Page[OrderOut])
def list_orders(
    page: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
    account: AccountModel = Depends(require_roles(RoleType.ADMIN)),
    db: Session = Depends(get_db),
    cache: redis.Redis = Depends(get_cache),
):
    return get_service(db, cache).list_all_orders(page, limit)


@router.get("/my-orders", response_model=Page[OrderOut])
def my_orders(
    page: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
    customer_id: int = Depends(get_current_customer_id),
    db: Session = Depends(get_db),
    cache: redis.Redis = Depends(get_cache),
):
    return get_service(db, cache).list_customer_orders(customer_id, page, limit)


@router.get("/restaurant-orders", response_model=Page[OrderOut])
def restaurant_orders(
    page: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
    account: AccountModel = Depends(require_roles(RoleType.RESTAURANT)),
    db: Session = Depends(get_db),
    cache: redis.Redis = Depends(get_cache),
):
    svc = get_service(db, cache)
    try:
        return svc.list_restaurant_orders(account.id, page, limit)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    account: AccountModel = Depends(
        require_roles(RoleType.CUSTOMER, RoleType.RESTAURANT, RoleType.ADMIN)
    ),
    db: Session = Depends(get_db),
    cache: redis.Redis = Depends(get_cache),
):
    svc = get_service(db, cache)
    try:
        return svc.get_order(order_id, account)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{order_id}/status", response_model=OrderOut)
def update_status(
    order_id: int,
    payload: OrderStatusIn,
    account: AccountModel = Depends(require_roles(RoleType.RESTAURANT, RoleType.ADMIN)),
    db: Session = Depends(get_db),
    cache: redis.Redis = Depends(get_cache),
):
    svc = get_service(db, cache)
    try:
        return svc.update_order_status(order_id, payload.status, account)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{order_id}/cancel", response_model=OrderOut)
def cancel_order(
    order_id: int,
    customer_id: int = Depends(get_current_customer_id),
    db: Session = Depends(get_db),
    cache: redis.Redis = Depends(get_cache),
):
    svc = get_service(db, cache)
    try:
        return svc.cancel_order(order_id, customer_id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
