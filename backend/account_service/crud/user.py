from typing import Optional
from sqlalchemy.orm import Session
from account_service.crud.base import CRUDBase
from account_service.models.user import User, USER_STATUS_ACTIVE


class UserCRUD(CRUDBase[User]):
    """Record mapper for the users table"""

    def __init__(self, db: Session):
        super().__init__(User, db)

    def count_by_username(self, username: str) -> int:
        return self.count(username=username)

    def get_active_by_username(self, username: str) -> Optional[User]:
        return self.get_one(username=username, status=USER_STATUS_ACTIVE)
