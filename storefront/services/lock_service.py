import redis
from storefront.utils.retry import redis_retry
from storefront.utils.settings import REDIS_URL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

#LUA porownaj i usun, atomicity
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""

#redis wykonuje skrypt lua atomowo, nie mozna wcisnac sie miedzy GET a DEL
#wiec lock zwalnia tylko ten, kto go zalozyl (token)


class LockService:
    """
    -blokada checkoutu na koszyk (jeden checkout naraz dla danego koszyka)
    -zwalnianie locka tylko przez wlasciciela tokenu
    """

    def __init__(self, url: str | None = None):
        self.redis = redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @staticmethod
    def _key(cart_id: int) -> str:
        return f"cart:{cart_id}:checkout"

    @redis_retry()
    def acquire_checkout_lock(self, cart_id: int, token: str, ttl: int) -> bool:
        key = self._key(cart_id)
        logger.info(f"Acquire lock {key}")
        #SET cart:1:checkout "<token>" NX EX 30
        return bool(
            self.redis.set(
                name=key,
                value=token,
                nx=True, #jesli klucz istnieje to nic nie rob i zwroc None
                ex=ttl, #wygasa sam, proces ktory padl w trakcie nie zablokuje koszyka na zawsze
            )
        )

    @redis_retry()
    def release_checkout_lock(self, cart_id: int, token: str) -> bool:
        key = self._key(cart_id)
        logger.info(f"Release lock {key}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)
