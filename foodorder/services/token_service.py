# foodorder/services/token_service.py
import secrets

import redis

from foodorder.utils.retry import redis_retry
from foodorder.utils.settings import SESSION_TTL_SECONDS, OTP_TTL_SECONDS
from foodorder.utils.logging import get_logger

logger = get_logger(__name__)

#LUA porownaj i usun - jednorazowy kod nie moze byc uzyty dwa razy
_CONSUME_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""


class TokenService:
    """
    -sesje (token -> account id) z TTL
    -kody OTP do resetu hasla z TTL
    wszystko w redisie zamiast w pamieci procesu
    """

    def __init__(
        self,
        cache: redis.Redis,
        session_ttl: int = SESSION_TTL_SECONDS,
        otp_ttl: int = OTP_TTL_SECONDS,
    ):
        self.redis = cache
        self.session_ttl = session_ttl
        self.otp_ttl = otp_ttl

    @staticmethod
    def _session_key(token: str) -> str:
        return f"session:{token}"

    @staticmethod
    def _otp_key(email: str) -> str:
        return f"otp:{email.lower()}"

    @redis_retry()
    def issue_session(self, account_id: int) -> str:
        token = secrets.token_urlsafe(32)
        self.redis.set(self._session_key(token), str(account_id), ex=self.session_ttl)
        logger.info(f"Issued session for account {account_id}")
        return token

    @redis_retry()
    def resolve_session(self, token: str) -> int | None:
        value = self.redis.get(self._session_key(token))
        return int(value) if value is not None else None

    @redis_retry()
    def revoke_session(self, token: str) -> bool:
        return bool(self.redis.delete(self._session_key(token)))

    @redis_retry()
    def issue_otp(self, email: str) -> str:
        otp = f"{secrets.randbelow(900000) + 100000}"
        self.redis.set(self._otp_key(email), otp, ex=self.otp_ttl)
        logger.info(f"Issued OTP for {email}")
        return otp

    @redis_retry()
    def check_otp(self, email: str, otp: str) -> bool:
        return self.redis.get(self._otp_key(email)) == otp

    @redis_retry()
    def consume_otp(self, email: str, otp: str) -> bool:
        res = self.redis.eval(_CONSUME_LUA, 1, self._otp_key(email), otp)
        return bool(res)
