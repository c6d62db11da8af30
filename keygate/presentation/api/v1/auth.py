"""登録・ログイン・ログアウト"""

from fastapi import APIRouter, Depends, Response

from ....core.config import Settings
from ....core.logging import get_logger
from ....domain.exceptions import AuthenticationError, ErrorCode, ValidationError
from ....domain.validation import (
    validate_password,
    validate_prefix,
    validate_username,
)
from ....infrastructure.repositories import UserRepository
from ....infrastructure.security import TokenCodec
from ...schemas.auth import (
    LoginRequest,
    LogoutResponse,
    RegisterRequest,
    RegisterResponse,
    StatusResponse,
    TokenResponse,
)
from ..deps import get_app_settings, get_token_codec, get_user_repository
from ..session_transport import clear_session_cookie, set_session_cookie

router = APIRouter()
logger = get_logger(__name__)


def _check_registration(body: RegisterRequest) -> None:
    """
    登録内容のルールチェック

    Raises:
        ValidationError: 最初に違反したフィールドのコードで送出する。
            違反した全フィールドのメッセージはdetailsに含める
    """
    checks = [
        (
            "username",
            validate_username(body.username),
            ErrorCode.USERNAME_VALIDATION_FAILED,
        ),
        (
            "password",
            validate_password(body.password),
            ErrorCode.PASSWORD_VALIDATION_FAILED,
        ),
        ("prefix", validate_prefix(body.prefix), ErrorCode.PREFIX_VALIDATION_FAILED),
    ]
    failures = [check for check in checks if not check[1].valid]
    if not failures:
        return

    field, result, code = failures[0]
    raise ValidationError(
        f"{field.capitalize()} validation failed: {'; '.join(result.errors)}",
        code=code,
        details={name: res.errors for name, res, _ in failures},
    )


async def _authenticate_user(
    users: UserRepository, body: LoginRequest
) -> tuple[str, str]:
    record = await users.find_by_credentials(body.username, body.password)
    if record is None:
        logger.info(f"Login failed: {body.username}")
        raise AuthenticationError(
            "Invalid credentials", code=ErrorCode.INVALID_CREDENTIALS
        )

    username = record.username or body.username
    await users.touch_last_login(username)
    return username, record.prefix


@router.post("/register", response_model=RegisterResponse)
async def register(
    body: RegisterRequest,
    users: UserRepository = Depends(get_user_repository),
) -> RegisterResponse:
    """
    ユーザー登録

    ルール違反は400、ストア障害は502
    """
    _check_registration(body)
    result = await users.create(body.username, body.password, body.prefix)
    data = result.rows if result.rows else {"affectedRows": result.affected_rows}
    return RegisterResponse(data=data)


@router.post("/login", response_model=StatusResponse)
async def login(
    body: LoginRequest,
    response: Response,
    users: UserRepository = Depends(get_user_repository),
    codec: TokenCodec = Depends(get_token_codec),
    settings: Settings = Depends(get_app_settings),
) -> StatusResponse:
    """
    ログインしてセッションCookieを発行

    prefixはユーザーレコードから取得する
    """
    username, prefix = await _authenticate_user(users, body)
    token = codec.encode_session(username, prefix, settings.SESSION_EXPIRE)
    set_session_cookie(response, token, settings)
    logger.info(f"User logged in: {username}")
    return StatusResponse()


@router.post("/token", response_model=TokenResponse)
async def issue_token(
    body: LoginRequest,
    users: UserRepository = Depends(get_user_repository),
    codec: TokenCodec = Depends(get_token_codec),
    settings: Settings = Depends(get_app_settings),
) -> TokenResponse:
    """Bearerトークンを発行"""
    username, prefix = await _authenticate_user(users, body)
    token = codec.encode_session(username, prefix, settings.BEARER_TOKEN_EXPIRE)
    logger.info(f"Bearer token issued: {username}")
    return TokenResponse(token=token, expires_in=settings.BEARER_TOKEN_EXPIRE)


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    response: Response, settings: Settings = Depends(get_app_settings)
) -> LogoutResponse:
    clear_session_cookie(response, settings)
    return LogoutResponse()
