import logging
from typing import Optional
from sqlalchemy.exc import IntegrityError
from account_service.core.exceptions import (
    BusinessException,
    PASSWORD_MISMATCH_MESSAGE,
    USER_NOT_FOUND_MESSAGE,
    USER_NOT_FOUND_OR_DISABLED_MESSAGE,
    USERNAME_EXISTS_MESSAGE,
)
from account_service.core.security import generate_token, get_password_hash, verify_password
from account_service.crud.user import UserCRUD
from account_service.models.user import USER_STATUS_ACTIVE
from account_service.schemas.common import PageResult
from account_service.schemas.user import UserCreate, UserLogin, UserResponse, UserUpdate
from account_service.services.session_cache import SessionCache

logger = logging.getLogger(__name__)


class UserService:
    """
    Account operations: registration, login/logout and profile CRUD.

    Each method is a straight sequence of store/cache calls with no retries.
    The register check-then-insert and the update write-then-read are not
    wrapped in a transaction; the unique index on username is the only guard
    against two concurrent registrations of the same name.
    """

    def __init__(self, users: UserCRUD, sessions: SessionCache):
        self.users = users
        self.sessions = sessions

    def register(self, user_in: UserCreate) -> UserResponse:
        logger.debug(f"Registering user {user_in.username}")

        count = self.users.count_by_username(user_in.username)
        if count > 0:
            logger.warning(f"Registration rejected, username {user_in.username} already exists")
            raise BusinessException(USERNAME_EXISTS_MESSAGE)

        values = user_in.model_dump()
        values["password"] = get_password_hash(user_in.password)
        values["status"] = USER_STATUS_ACTIVE
        try:
            db_user = self.users.create(values)
        except IntegrityError:
            # Lost the race against a concurrent registration of the same name
            logger.warning(f"Registration rejected by unique index, username {user_in.username}")
            raise BusinessException(USERNAME_EXISTS_MESSAGE)

        logger.info(f"Registered user {db_user.username} (id={db_user.id})")
        return UserResponse.model_validate(db_user)

    def login(self, login_in: UserLogin) -> str:
        logger.debug(f"Login attempt for {login_in.username}")

        db_user = self.users.get_active_by_username(login_in.username)
        if db_user is None:
            logger.warning(f"Login failed, user {login_in.username} not found or disabled")
            raise BusinessException(USER_NOT_FOUND_OR_DISABLED_MESSAGE)

        if not verify_password(login_in.password, db_user.password):
            logger.warning(f"Login failed, wrong password for {login_in.username}")
            raise BusinessException(PASSWORD_MISMATCH_MESSAGE)

        token = generate_token()
        self.sessions.set(token, UserResponse.model_validate(db_user))

        logger.info(f"User {login_in.username} logged in")
        return token

    def logout(self, token: str) -> None:
        # Unknown or expired tokens are not an error
        removed = self.sessions.delete(token)
        logger.info(f"Logout for session token (removed={removed})")

    def get_session_user(self, token: str) -> Optional[UserResponse]:
        """Profile cached at login for this token, or None once logged out/expired"""
        return self.sessions.get(token)

    def get_user_info(self, user_id: int) -> UserResponse:
        logger.debug(f"Fetching user {user_id}")

        db_user = self.users.get(user_id)
        if db_user is None:
            logger.warning(f"User {user_id} not found")
            raise BusinessException(USER_NOT_FOUND_MESSAGE)

        return UserResponse.model_validate(db_user)

    def get_user_page(self, page_num: int, page_size: int) -> PageResult[UserResponse]:
        logger.debug(f"Listing active users, page {page_num} size {page_size}")

        total, records = self.users.paginate(page_num, page_size, status=USER_STATUS_ACTIVE)
        logger.debug(f"Page query returned {len(records)} of {total} users")

        return PageResult[UserResponse].of(
            total=total,
            records=[UserResponse.model_validate(record) for record in records],
            current=page_num,
            size=page_size,
        )

    def update_user(self, user_in: UserUpdate) -> UserResponse:
        logger.debug(f"Updating user {user_in.id}")

        values = user_in.model_dump(exclude={"id"}, exclude_none=True)
        if "password" in values:
            values["password"] = get_password_hash(values["password"])

        try:
            updated = self.users.update_by_id(user_in.id, values)
        except IntegrityError:
            logger.warning(f"Update of user {user_in.id} rejected, username {user_in.username} taken")
            raise BusinessException(USERNAME_EXISTS_MESSAGE)
        logger.debug(f"Update of user {user_in.id} affected {updated} rows")

        result = self.get_user_info(user_in.id)
        logger.info(f"Updated user {user_in.id}")
        return result

    def delete_user(self, user_id: int) -> None:
        deleted = self.users.delete_by_id(user_id)
        if deleted > 0:
            logger.info(f"Deleted user {user_id}")
        else:
            logger.warning(f"Delete of user {user_id} affected no rows, user may not exist")
