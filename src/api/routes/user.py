from fastapi import APIRouter, Depends, status

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.app.services.notifier import INotifier
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.users import (
    CreateUserCommand,
    CreateUserResponse,
    CreateUserUseCase,
    GetCurrentUserUseCase,
    UserInfo,
)
from src.depends import get_current_user, get_notifier, get_unit_of_work, require_roles
from src.domain.entities import UserRole

router = APIRouter(tags=["User"])


@router.get("/me", status_code=status.HTTP_200_OK, response_model=UserInfo)
async def get_me(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Load Current User

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 404 Not Found: User no longer exists
    """
    use_case = GetCurrentUserUseCase(uow)
    result = await use_case.execute(int(current_user["user_id"]))

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/users",
    status_code=status.HTTP_201_CREATED,
    response_model=CreateUserResponse,
    dependencies=[Depends(require_roles(UserRole.admin, UserRole.manager))],
)
async def create_user(
    command: CreateUserCommand,
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: INotifier = Depends(get_notifier),
):
    """
    Create User (admins and managers)

    Opens an account with a temporary password, emails it to the user and
    flags the account so the password must be changed on first login.

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: Caller is neither an admin nor a manager
        - 409 Conflict: Username or email already exists
    """
    use_case = CreateUserUseCase(
        uow, notifier, login_url=f"{ApplicationConfig.APP_BASE_URL.rstrip('/')}/login"
    )
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code in ("USERNAME_ALREADY_EXISTS", "EMAIL_ALREADY_EXISTS"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value
