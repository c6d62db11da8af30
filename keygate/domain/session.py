"""
セッションペイロードとプリンシパル

トークンに埋め込まれるのは {username, prefix, exp} のみ。
prefixはログイン時にユーザーレコードから取得し、以後クライアントからは受け付けない。
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class SessionPayload:
    """
    セッショントークンのペイロード

    Attributes:
        username: ユーザー名
        prefix: テナントスコープ
        exp: 有効期限（UNIX秒）
    """

    username: str
    prefix: str
    exp: int

    def to_dict(self) -> dict[str, Any]:
        return {"username": self.username, "prefix": self.prefix, "exp": self.exp}

    @classmethod
    def from_dict(cls, data: Any) -> Optional["SessionPayload"]:
        """
        復号済みJSONからペイロードを生成

        Args:
            data: 復号済みJSON

        Returns:
            形が不正な場合はNone
        """
        if not isinstance(data, dict):
            return None
        username = data.get("username")
        prefix = data.get("prefix")
        exp = data.get("exp")
        if not isinstance(username, str) or not isinstance(prefix, str):
            return None
        # boolはintのサブクラスなので除外
        if not isinstance(exp, int) or isinstance(exp, bool):
            return None
        return cls(username=username, prefix=prefix, exp=exp)

    def is_expired(self, now: int) -> bool:
        """expがnowと等しい場合はまだ有効"""
        return self.exp < now


@dataclass(frozen=True)
class Principal:
    """
    認証済みの主体（1リクエストの間だけ存在する）

    Attributes:
        username: ユーザー名
        prefix: 全データアクセスの認可スコープ
    """

    username: str
    prefix: str

    @classmethod
    def from_payload(cls, payload: SessionPayload) -> "Principal":
        return cls(username=payload.username, prefix=payload.prefix)
