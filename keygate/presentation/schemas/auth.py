"""認証関連のスキーマ定義"""

from typing import Any, Literal

from pydantic import BaseModel, StrictStr


class RegisterRequest(BaseModel):
    """
    ユーザー登録リクエスト

    Attributes:
        username: ユーザー名
        password: パスワード
        prefix: テナントスコープ
    """

    username: StrictStr
    password: StrictStr
    prefix: StrictStr


class LoginRequest(BaseModel):
    username: StrictStr
    password: StrictStr


class StatusResponse(BaseModel):
    status: Literal["ok"] = "ok"


class RegisterResponse(StatusResponse):
    data: Any = None


class LogoutResponse(StatusResponse):
    message: str = "Logged out"


class TokenResponse(StatusResponse):
    """
    Bearerトークン発行レスポンス

    Attributes:
        token: セッショントークン
        token_type: 常に"bearer"
        expires_in: 有効秒数
    """

    token: str
    token_type: Literal["bearer"] = "bearer"
    expires_in: int
