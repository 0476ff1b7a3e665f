from fastapi import APIRouter, Depends, Path, Query
from account_service.api.dependencies import get_current_user, get_token, get_user_service
from account_service.schemas.common import ApiResponse, PageResult
from account_service.schemas.user import MAX_USER_ID, UserCreate, UserLogin, UserResponse, UserUpdate
from account_service.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Literal paths (/hello, /page, /me) are declared before /{user_id}, otherwise
# the path parameter route would swallow them


@router.get("/hello", response_model=ApiResponse[str])
async def hello():
    """Liveness probe for the users API"""
    return ApiResponse.success("hello")


@router.post("/register", response_model=ApiResponse[UserResponse])
def register(user_in: UserCreate, service: UserService = Depends(get_user_service)):
    """
    Register a new account.

    The username must not already exist. The stored account is active and
    its password is kept only as a digest.
    """
    return ApiResponse.success(service.register(user_in))


@router.post("/login", response_model=ApiResponse[str])
def login(login_in: UserLogin, service: UserService = Depends(get_user_service)):
    """Verify username/password and return a session token for the Authorization header"""
    return ApiResponse.success(service.login(login_in))


@router.post("/logout", response_model=ApiResponse)
def logout(token: str = Depends(get_token), service: UserService = Depends(get_user_service)):
    """Invalidate the session token; succeeds even if the token is unknown"""
    service.logout(token)
    return ApiResponse.success(None)


@router.get("/me", response_model=ApiResponse[UserResponse])
def me(current_user: UserResponse = Depends(get_current_user)):
    """Profile stored for the caller's session token"""
    return ApiResponse.success(current_user)


@router.get("/page", response_model=ApiResponse[PageResult[UserResponse]])
def get_user_page(
    page_num: int = Query(1, alias="pageNum", ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize", ge=1, le=MAX_PAGE_SIZE),
    service: UserService = Depends(get_user_service),
):
    """Page through active users"""
    return ApiResponse.success(service.get_user_page(page_num, page_size))


@router.get("/{user_id}", response_model=ApiResponse[UserResponse])
def get_user_info(
    user_id: int = Path(ge=1, le=MAX_USER_ID),
    service: UserService = Depends(get_user_service),
):
    return ApiResponse.success(service.get_user_info(user_id))


@router.put("", response_model=ApiResponse[UserResponse])
@router.put("/", response_model=ApiResponse[UserResponse], include_in_schema=False)
def update_user(user_in: UserUpdate, service: UserService = Depends(get_user_service)):
    """Overwrite the supplied fields of the user identified by id"""
    return ApiResponse.success(service.update_user(user_in))


@router.delete("/{user_id}", response_model=ApiResponse)
def delete_user(
    user_id: int = Path(ge=1, le=MAX_USER_ID),
    service: UserService = Depends(get_user_service),
):
    """Hard delete; deleting an id that does not exist is not an error"""
    service.delete_user(user_id)
    return ApiResponse.success(None)
