from sqlalchemy.orm import Session

from storefront.data.models.store import StoreModel


class StoreRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_store(self, store_id: int) -> StoreModel | None:
        return self.db.get(StoreModel, store_id)

    def is_owner(self, store_id: int, user_id: str | None) -> bool:
        if not user_id:
            return False
        store = self.get_store(store_id)
        return store is not None and store.owner_id == user_id
