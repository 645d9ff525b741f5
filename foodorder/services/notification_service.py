# foodorder/services/notification_service.py
import smtplib
from email.message import EmailMessage

from foodorder.celery_worker import celery_app
from foodorder.utils.settings import SMTP_HOST, SMTP_PORT, SMTP_USER, SMTP_PASSWORD, MAIL_FROM
from foodorder.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysylania powiadomien.
    Uzywa Celery do asynchronicznego przetwarzania.
    """

    @staticmethod
    def send_order_confirmation(email: str, order_id: int, total_price: str):
        send_email_task.delay(
            email,
            f"Zamowienie #{order_id} przyjete",
            f"Twoje zamowienie #{order_id} na kwote {total_price} zostalo przyjete.",
        )

    @staticmethod
    def send_otp(email: str, otp: str, ttl_seconds: int):
        send_email_task.delay(
            email,
            "Kod OTP do resetu hasla",
            f"Twoj kod OTP to: {otp}. Kod jest wazny przez {ttl_seconds // 60} min.",
        )


@celery_app.task(name="foodorder.services.notification_service.send_email_task")
def send_email_task(to: str, subject: str, body: str):
    """
    Celery task - wysyla maila przez SMTP.
    Bez skonfigurowanego SMTP_HOST tylko loguje.
    """
    if not SMTP_HOST:
        logger.info(f"[NOTIFICATION] to={to} subject={subject!r}")
        return {"to": to, "status": "logged"}

    msg = EmailMessage()
    msg["From"] = MAIL_FROM
    msg["To"] = to
    msg["Subject"] = subject
    msg.set_content(body)

    with smtplib.SMTP(SMTP_HOST, SMTP_PORT, timeout=10) as smtp:
        smtp.starttls()
        if SMTP_USER:
            smtp.login(SMTP_USER, SMTP_PASSWORD)
        smtp.send_message(msg)

    logger.info(f"[NOTIFICATION] sent to={to} subject={subject!r}")
    return {"to": to, "status": "sent"}
