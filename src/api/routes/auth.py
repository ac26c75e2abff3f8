from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.app.services.notifier import INotifier
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    LoginUseCase,
    RequestPasswordResetUseCase,
    VerifyResetTokenUseCase,
    ConfirmPasswordResetUseCase,
    SetNewPasswordUseCase,
    LoginResponse,
    MessageResponse,
    VerifyResetTokenResponse,
)
from src.depends import get_current_user, get_notifier, get_unit_of_work

router = APIRouter(prefix="/auth", tags=["Authentication"])


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Validates incoming login request.
    """

    username: str = Field(..., description="Username")
    password: str = Field(..., description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(request: LoginRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    User Login

    Authenticates user and returns a JWT access token.
    The response tells the client whether a temporary password must be replaced.

    Raises:
        - 401 Unauthorized: Invalid credentials
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow)
    result = await use_case.execute(request.username, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value


class RequestPasswordResetRequest(BaseModel):
    """
    Request password reset HTTP request payload
    """

    email: EmailStr = Field(..., description="User email address")


@router.post("/request-reset", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def request_password_reset(
    request: RequestPasswordResetRequest,
    background_tasks: BackgroundTasks,
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: INotifier = Depends(get_notifier),
):
    """
    Request Password Reset

    Generates a reset token and emails the reset link once the response
    has been sent.

    Security:
        - No email enumeration (same response for valid/invalid emails)
        - Token is cryptographically secure (32 bytes), stored as SHA-256

    Returns:
        - 200 OK: Always returns the same message; delivery failures are only logged
    """
    use_case = RequestPasswordResetUseCase(
        uow,
        notifier,
        base_url=ApplicationConfig.APP_BASE_URL,
        validity_minutes=ApplicationConfig.RESET_TOKEN_VALIDITY_MINUTES,
        schedule=background_tasks.add_task,
    )
    result = await use_case.execute(request.email)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get(
    "/verify-reset-token/{token}",
    status_code=status.HTTP_200_OK,
    response_model=VerifyResetTokenResponse,
)
async def verify_reset_token(token: str, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Verify Reset Token

    Checks a token before the reset form is shown.

    Raises:
        - 400 Bad Request: Invalid or expired token
    """
    use_case = VerifyResetTokenUseCase(uow)
    result = await use_case.execute(token)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_TOKEN":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class ResetPasswordRequest(BaseModel):
    """
    Reset password HTTP request payload
    """

    token: str = Field(..., min_length=1, description="Password reset token from email")
    password: str = Field(..., min_length=1, description="New password")


@router.post("/reset-password", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def reset_password(request: ResetPasswordRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Reset Password

    Validates the new password and the reset token, stores the new password
    and deletes the token.

    Raises:
        - 400 Bad Request: Invalid/expired token or weak password
        - 404 Not Found: Token owner no longer exists
        - 500 Internal Server Error: Server error
    """
    use_case = ConfirmPasswordResetUseCase(uow)
    result = await use_case.execute(request.token, request.password)

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_TOKEN", "WEAK_PASSWORD"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


class SetNewPasswordRequest(BaseModel):
    """
    Set new password HTTP request payload

    current_password may be omitted while the account still uses a temporary password.
    """

    current_password: Optional[str] = Field(None, description="Current password")
    new_password: str = Field(..., min_length=1, description="New password")


@router.post("/set-new-password", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def set_new_password(
    request: SetNewPasswordRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Set New Password

    Replaces the password of the signed-in user.

    Raises:
        - 400 Bad Request: Missing/incorrect current password or weak password
        - 401 Unauthorized: Invalid or expired JWT
        - 404 Not Found: User not found
    """
    use_case = SetNewPasswordUseCase(uow)
    result = await use_case.execute(
        int(current_user["user_id"]), request.current_password, request.new_password
    )

    if result.is_err():
        error = result.error
        if error.code in (
            "CURRENT_PASSWORD_REQUIRED",
            "INVALID_CURRENT_PASSWORD",
            "WEAK_PASSWORD",
        ):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
