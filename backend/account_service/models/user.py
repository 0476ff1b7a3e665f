from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from account_service.core.database import Base

# status values; anything other than active counts as disabled
USER_STATUS_ACTIVE = 1
USER_STATUS_DISABLED = 0


class User(Base):
    """
    User account record.

    Passwords are stored as 32-character MD5 hex digests (see core.security).
    Rows are hard-deleted; there is no tombstone column.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    # Uniqueness is checked by the service before insert; the constraint
    # catches the race between two concurrent registrations
    username = Column(String(64), unique=True, index=True, nullable=False)
    password = Column(String(64), nullable=False)
    nickname = Column(String(64), nullable=True)
    email = Column(String(128), nullable=True)
    phone = Column(String(32), nullable=True)
    status = Column(Integer, nullable=False, default=USER_STATUS_ACTIVE, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r} status={self.status}>"
