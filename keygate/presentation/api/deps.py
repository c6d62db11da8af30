from typing import Optional

from fastapi import Depends, Request, Security
from fastapi.security import APIKeyHeader

from ...core.config import Settings
from ...domain.exceptions import AuthenticationError
from ...domain.session import Principal
from ...infrastructure.repositories import (
    KeyActivationService,
    KeyRepository,
    UserRepository,
)
from ...infrastructure.security import TokenCodec
from ...infrastructure.store import SqlStoreClient
from .session_transport import read_bearer_token, read_cookie_token


def get_app_settings(request: Request) -> Settings:
    """
    create_app()で生成した設定を取得するdependency
    """
    return request.app.state.settings


def get_token_codec(settings: Settings = Depends(get_app_settings)) -> TokenCodec:
    # 鍵は保持せず、リクエストごとにシークレットから導出する
    return TokenCodec(settings.SESSION_SECRET)


def get_store_client(settings: Settings = Depends(get_app_settings)) -> SqlStoreClient:
    return SqlStoreClient(settings)


def get_user_repository(
    store: SqlStoreClient = Depends(get_store_client),
) -> UserRepository:
    return UserRepository(store)


def get_key_repository(
    store: SqlStoreClient = Depends(get_store_client),
) -> KeyRepository:
    return KeyRepository(store)


def get_activation_service(
    repository: KeyRepository = Depends(get_key_repository),
) -> KeyActivationService:
    return KeyActivationService(repository)


# Bearer認証用のヘッダーハンドラー
api_key_header = APIKeyHeader(
    name="Authorization", scheme_name="Bearer", auto_error=False
)


def authenticate(
    request: Request,
    authorization: Optional[str] = Security(api_key_header),
    codec: TokenCodec = Depends(get_token_codec),
    settings: Settings = Depends(get_app_settings),
) -> Optional[Principal]:
    """
    リクエストのセッションを検証するdependency

    Cookieを先に確認し、無効な場合はAuthorization: Bearer を確認する

    Returns:
        有効なセッションがあればPrincipal、なければNone
    """
    for token in (read_cookie_token(request, settings), read_bearer_token(authorization)):
        if not token:
            continue
        payload = codec.decode_session(token)
        if payload is not None:
            return Principal.from_payload(payload)
    return None


def require_principal(
    principal: Optional[Principal] = Depends(authenticate),
) -> Principal:
    """
    認証必須ルート用のdependency

    Raises:
        AuthenticationError: 有効なセッションがない場合（理由は返さない）
    """
    if principal is None:
        raise AuthenticationError("Unauthorized")
    return principal
