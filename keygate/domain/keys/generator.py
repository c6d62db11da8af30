"""キー文字列の生成"""

import secrets
import string

KEY_ALPHABET = string.ascii_lowercase + string.digits
KEY_RANDOM_LENGTH = 15

MIN_AMOUNT = 1
MAX_AMOUNT = 30
MIN_LENGTH_DAYS = 1
MAX_LENGTH_DAYS = 30


def generate_random_key(length: int = KEY_RANDOM_LENGTH) -> str:
    """
    CSPRNGから英小文字・数字のランダム文字列を生成

    Args:
        length: 文字数

    Returns:
        ランダム文字列
    """
    return "".join(secrets.choice(KEY_ALPHABET) for _ in range(length))


def build_key(prefix: str, length_days: int) -> str:
    """
    プレフィックス・日数・ランダム部からキーを組み立てる

    Args:
        prefix: 所有テナント
        length_days: 有効日数

    Returns:
        "{prefix}_{length}_{random}" 形式のキー
    """
    return f"{prefix}_{length_days}_{generate_random_key()}"


def generate_keys(prefix: str, length_days: int, amount: int) -> list[str]:
    """
    重複のないキーをamount個生成

    Args:
        prefix: 所有テナント
        length_days: 有効日数
        amount: 生成数

    Returns:
        キーのリスト
    """
    keys: list[str] = []
    seen: set[str] = set()
    while len(keys) < amount:
        key = build_key(prefix, length_days)
        if key in seen:
            continue
        seen.add(key)
        keys.append(key)
    return keys
