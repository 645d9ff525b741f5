# foodorder/data/cache.py
import redis

from foodorder.utils.settings import REDIS_URL

#pula polaczen wspolna dla wszystkich requestow, klient jest thread-safe
redis_client = redis.Redis.from_url(REDIS_URL, decode_responses=True)


def get_cache() -> redis.Redis:
    return redis_client
