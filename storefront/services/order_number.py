# storefront/services/order_number.py
import secrets
import string
import time
from typing import Callable

from tenacity import Retrying, stop_after_attempt, retry_if_result

from storefront.domain.errors import OrderNumberExhausted
from storefront.utils.settings import ORDER_NUMBER_MAX_ATTEMPTS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_ALPHABET = string.digits + string.ascii_uppercase


def _random_suffix(length: int = 6) -> str:
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


class OrderNumberGenerator:
    """
    ORD-<epoch ms>-<6 znakow base36>.
    Sprawdzenie exists() to tylko optymalizacja, gwarancje daje unique constraint w bazie.
    """

    def __init__(
        self,
        exists: Callable[[str], bool],
        max_attempts: int = ORDER_NUMBER_MAX_ATTEMPTS,
        clock: Callable[[], float] = time.time,
        suffix: Callable[[], str] = _random_suffix,
    ):
        self.exists = exists
        self.max_attempts = max_attempts
        self.clock = clock
        self.suffix = suffix

    def candidate(self) -> str:
        return f"ORD-{int(self.clock() * 1000)}-{self.suffix()}"

    def _try_candidate(self) -> str | None:
        number = self.candidate()
        if self.exists(number):
            logger.warning(f"Order number collision: {number}")
            return None
        return number

    def _exhausted(self, retry_state):
        logger.error(f"No free order number after {retry_state.attempt_number} attempts")
        raise OrderNumberExhausted()

    def generate(self) -> str:
        retrying = Retrying(
            stop=stop_after_attempt(self.max_attempts),
            retry=retry_if_result(lambda number: number is None),
            retry_error_callback=self._exhausted,
        )
        return retrying(self._try_candidate)
