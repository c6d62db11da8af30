"""
ユーザー入力のルール

各ルールは該当するメッセージをすべて返す
"""

import re
from dataclasses import dataclass, field
from typing import Any

_USERNAME_CHARS = re.compile(r"[a-zA-Z0-9_-]+")
_PREFIX_CHARS = re.compile(r"[a-zA-Z0-9_]+")

WEAK_PASSWORDS = frozenset({"123456", "password", "qwerty", "123456789", "12345678"})


@dataclass
class ValidationResult:
    """ルール適用結果"""

    errors: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


def validate_username(username: Any) -> ValidationResult:
    """
    ユーザー名を検証

    3〜50文字、英数字・アンダースコア・ハイフンのみ、先頭は英字
    """
    result = ValidationResult()
    if not isinstance(username, str):
        result.errors.append("Username must be a string")
        return result

    if not username.strip():
        result.errors.append("Username cannot be empty")
    if len(username) < 3:
        result.errors.append("Username must be at least 3 characters")
    if len(username) > 50:
        result.errors.append("Username must not exceed 50 characters")
    if not _USERNAME_CHARS.fullmatch(username):
        result.errors.append(
            "Username can only contain letters, numbers, underscore and dash"
        )
    if username and not re.match(r"^[a-zA-Z]", username):
        result.errors.append("Username must start with a letter")
    return result


def validate_password(password: Any) -> ValidationResult:
    """
    パスワードを検証

    6〜128文字、英字と数字をそれぞれ1文字以上含み、弱いパスワードでないこと
    """
    result = ValidationResult()
    if not isinstance(password, str):
        result.errors.append("Password must be a string")
        return result

    if not password:
        result.errors.append("Password cannot be empty")
    if len(password) < 6:
        result.errors.append("Password must be at least 6 characters")
    if len(password) > 128:
        result.errors.append("Password must not exceed 128 characters")
    if not re.search(r"[a-zA-Z]", password):
        result.errors.append("Password must contain at least one letter")
    if not re.search(r"[0-9]", password):
        result.errors.append("Password must contain at least one number")
    if password.lower() in WEAK_PASSWORDS:
        result.errors.append(
            "Password is too weak, please choose a stronger password"
        )
    return result


def validate_prefix(prefix: Any) -> ValidationResult:
    """
    プレフィックスを検証

    2〜20文字、英数字とアンダースコアのみ
    """
    result = ValidationResult()
    if not isinstance(prefix, str):
        result.errors.append("Prefix must be a string")
        return result

    if not prefix.strip():
        result.errors.append("Prefix cannot be empty")
    if len(prefix) < 2:
        result.errors.append("Prefix must be at least 2 characters")
    if len(prefix) > 20:
        result.errors.append("Prefix must not exceed 20 characters")
    if not _PREFIX_CHARS.fullmatch(prefix):
        result.errors.append("Prefix can only contain letters, numbers and underscore")
    return result
