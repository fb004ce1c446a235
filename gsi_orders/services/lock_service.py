# gsi_orders/services/lock_service.py
import redis

from gsi_orders.utils.retry import redis_retry
from gsi_orders.utils.settings import REDIS_URL
from gsi_orders.utils.logging import get_logger

logger = get_logger(__name__)

#LUA compare and delete, only the owner may release
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""


class LockService:
    """
    Short lived Redis locks for checkout sessions.

    The payment provider may deliver the same webhook twice at once; only the
    holder of `checkout:<session_id>:lock` turns it into an order. Locks
    expire on their own after `ttl` seconds.
    """

    def __init__(self, url: str | None = None, client: redis.Redis | None = None):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @staticmethod
    def _key(session_id: str) -> str:
        return f"checkout:{session_id}:lock"

    @redis_retry()
    def acquire_session_lock(self, session_id: str, owner: str, ttl: int) -> bool:
        key = self._key(session_id)
        logger.info(f"Acquire lock {key} for {owner}")
        #SET checkout:cs_123:lock "<owner>" NX EX 300
        return bool(self.redis.set(name=key, value=owner, nx=True, ex=ttl))

    @redis_retry()
    def release_session_lock(self, session_id: str, owner: str) -> bool:
        key = self._key(session_id)
        logger.info(f"Release lock {key} for {owner}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, owner)
        return bool(res)
