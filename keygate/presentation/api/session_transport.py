"""
セッショントークンの受け渡し

Cookieバインディング（ブラウザ向け）とBearerバインディング（APIクライアント向け）
"""

from typing import Optional

from fastapi import Request, Response

from ...core.config import Settings


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    """
    セッションCookieを設定

    Args:
        response: レスポンス
        token: セッショントークン
        settings: アプリケーション設定
    """
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_EXPIRE,
        path="/",
        httponly=True,
        secure=True,
        samesite=settings.SESSION_COOKIE_SAMESITE,
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    """空の値とmax_age=0でCookieを上書きする"""
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value="",
        max_age=0,
        path="/",
        httponly=True,
        secure=True,
        samesite=settings.SESSION_COOKIE_SAMESITE,
    )


def read_cookie_token(request: Request, settings: Settings) -> Optional[str]:
    return request.cookies.get(settings.SESSION_COOKIE_NAME) or None


def read_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Authorizationヘッダーからトークンを取り出す

    Args:
        authorization: Authorizationヘッダーの値

    Returns:
        'Bearer {token}' 形式でない場合はNone
    """
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None
