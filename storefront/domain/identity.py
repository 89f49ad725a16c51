# storefront/domain/identity.py
from dataclasses import dataclass

from storefront.domain.errors import InvalidIdentity


@dataclass(frozen=True)
class Identity:
    """Wlasciciel koszyka: zalogowany user albo sesja goscia, nigdy oba."""

    user_id: str | None = None
    session_id: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id)

    def require_single(self) -> "Identity":
        if bool(self.user_id) == bool(self.session_id):
            raise InvalidIdentity()
        return self

    def owns(self, user_id: str | None, session_id: str | None) -> bool:
        if self.user_id:
            return user_id == self.user_id
        return session_id is not None and session_id == self.session_id
