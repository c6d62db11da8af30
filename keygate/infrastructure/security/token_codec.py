"""
トークンの暗号化/復号化

AES-256-GCMでJSONを暗号化し、Cookie値やヘッダー値にそのまま使える
URLセーフ・パディングなしの文字列に変換する。

トークン形式: base64url(nonce(12B) || ciphertext+tag)
"""

import base64
import binascii
import hashlib
import json
import os
import re
import time
from typing import Any, Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ...core.logging import get_logger
from ...domain.session import SessionPayload

logger = get_logger(__name__)

NONCE_SIZE = 12
TAG_SIZE = 16

_B64URL_CHARS = re.compile(r"[A-Za-z0-9_-]+")


def derive_key(secret: str) -> bytes:
    """
    共有シークレットから256bitの鍵を導出

    シークレットの長さ・形式は問わない

    Args:
        secret: 共有シークレット

    Returns:
        32バイトの鍵
    """
    return hashlib.sha256(secret.encode("utf-8")).digest()


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64url_decode(text: str) -> bytes:
    # アルファベット外の文字や標準base64の +/ は受け付けない
    if not _B64URL_CHARS.fullmatch(text):
        raise ValueError("Token is not base64url text")
    padding = "=" * (-len(text) % 4)
    return base64.b64decode(
        (text + padding).encode("ascii"), altchars=b"-_", validate=True
    )


class TokenCodec:
    """
    セッショントークンとデバイスクライアント通信で共用する暗号化ルーチン

    復号化はどのような理由で失敗してもNoneを返し、失敗理由を呼び出し側に区別させない
    """

    def __init__(self, secret: str):
        """
        Args:
            secret: 共有シークレット（鍵は保持せず、このインスタンス内でのみ使用）
        """
        if not secret:
            raise ValueError("Token codec secret must not be empty")
        self._aesgcm = AESGCM(derive_key(secret))

    def encrypt_json(self, data: Any) -> str:
        """
        任意のJSONを暗号化

        Args:
            data: JSONシリアライズ可能な値

        Returns:
            不透明なトークン文字列
        """
        plaintext = json.dumps(data, ensure_ascii=False, separators=(",", ":"))
        nonce = os.urandom(NONCE_SIZE)
        ciphertext = self._aesgcm.encrypt(nonce, plaintext.encode("utf-8"), None)
        return _b64url_encode(nonce + ciphertext)

    def decrypt_json(self, token: Optional[str]) -> Optional[Any]:
        """
        トークンを復号化してJSONを取り出す

        Args:
            token: トークン文字列

        Returns:
            復号済みの値、失敗した場合はNone
        """
        if not token or not isinstance(token, str):
            return None
        try:
            raw = _b64url_decode(token.strip())
            if len(raw) < NONCE_SIZE + TAG_SIZE:
                return None
            nonce, ciphertext = raw[:NONCE_SIZE], raw[NONCE_SIZE:]
            plaintext = self._aesgcm.decrypt(nonce, ciphertext, None)
            return json.loads(plaintext.decode("utf-8"))
        except (binascii.Error, ValueError, InvalidTag, UnicodeError):
            # json.JSONDecodeErrorはValueErrorのサブクラス
            logger.debug("Token decryption failed")
            return None

    def encode_session(self, username: str, prefix: str, ttl_seconds: int) -> str:
        """
        セッショントークンを発行

        Args:
            username: ユーザー名
            prefix: テナントスコープ
            ttl_seconds: 有効期間（秒）

        Returns:
            セッショントークン
        """
        payload = SessionPayload(
            username=username,
            prefix=prefix,
            exp=int(time.time()) + ttl_seconds,
        )
        return self.encrypt_json(payload.to_dict())

    def decode_session(self, token: Optional[str]) -> Optional[SessionPayload]:
        """
        セッショントークンを検証して取り出す

        Args:
            token: セッショントークン

        Returns:
            有効なペイロード、無効または期限切れの場合はNone
        """
        payload = SessionPayload.from_dict(self.decrypt_json(token))
        if payload is None:
            return None
        if payload.is_expired(int(time.time())):
            logger.debug("Session token expired")
            return None
        return payload
