# foodorder/api/routers/auth.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import redis

from foodorder.api.deps import get_token, get_current_account
from foodorder.data.cache import get_cache
from foodorder.data.database import get_db
from foodorder.data.models.account import AccountModel
from foodorder.domain.errors import NotFoundError
from foodorder.domain.schemas import (
    RegisterIn,
    LoginIn,
    TokenOut,
    AccountOut,
    ForgotPasswordIn,
    VerifyOtpIn,
    ResetPasswordIn,
    MessageOut,
)
from foodorder.services.auth_service import AuthService, to_account_out
from foodorder.services.notification_service import NotificationService
from foodorder.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def get_service(db: Session, cache: redis.Redis):
    return AuthService(db, cache)


@router.post("/register", response_model=AccountOut, status_code=201)
def register(payload: RegisterIn, db: Session = Depends(get_db), cache: redis.Redis = Depends(get_cache)):
    svc = get_service(db, cache)
    try:
        return svc.register(payload)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, db: Session = Depends(get_db), cache: redis.Redis = Depends(get_cache)):
    svc = get_service(db, cache)
    try:
        return svc.login(payload.username, payload.password)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))


@router.post("/logout", response_model=MessageOut)
def logout(
    token: str = Depends(get_token),
    account: AccountModel = Depends(get_current_account),
    db: Session = Depends(get_db),
    cache: redis.Redis = Depends(get_cache),
):
    get_service(db, cache).logout(token)
    return MessageOut(message="Wylogowano")


@router.get("/me", response_model=AccountOut)
def me(account: AccountModel = Depends(get_current_account)):
    return to_account_out(account)


@router.post("/forgot-password", response_model=MessageOut)
def forgot_password(
    payload: ForgotPasswordIn,
    db: Session = Depends(get_db),
    cache: redis.Redis = Depends(get_cache),
):
    svc = get_service(db, cache)
    try:
        account, otp = svc.forgot_password(payload.email)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    #OTP jest juz w redisie - awaria kolejki nie moze dac 500
    try:
        NotificationService.send_otp(account.email, otp, svc.tokens.otp_ttl)
    except Exception as e:
        logger.warning(f"Failed to queue OTP mail for account {account.id}: {e}")
    return MessageOut(message="OTP zostal wyslany mailem")


@router.post("/verify-otp", response_model=MessageOut)
def verify_otp(payload: VerifyOtpIn, db: Session = Depends(get_db), cache: redis.Redis = Depends(get_cache)):
    svc = get_service(db, cache)
    try:
        svc.verify_otp(payload.email, payload.otp)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return MessageOut(message="OTP poprawny")


@router.post("/reset-password", response_model=MessageOut)
def reset_password(
    payload: ResetPasswordIn,
    db: Session = Depends(get_db),
    cache: redis.Redis = Depends(get_cache),
):
    svc = get_service(db, cache)
    try:
        svc.reset_password(payload.email, payload.otp, payload.new_password)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return MessageOut(message="Haslo zostalo zmienione")
