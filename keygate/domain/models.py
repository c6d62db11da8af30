"""
ストアの行データとレコード型

ストアはスキーマレスな行（カラム名 -> スカラー/NULL）を返す。
フィールドが既知のものだけ型付きレコードに変換する。
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional, Union

Scalar = Union[str, int, float, bool, None]
Row = dict[str, Scalar]

# ストアのDATETIME表現（UTC）
STORE_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_timestamp(value: datetime) -> str:
    """
    datetimeをストアのUTCタイムスタンプ文字列に変換

    Args:
        value: 変換対象（naiveの場合はUTCとみなす）

    Returns:
        "YYYY-MM-DD HH:MM:SS" 形式の文字列
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(STORE_TIMESTAMP_FORMAT)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    ストアのタイムスタンプをUTCのdatetimeに変換

    タイムゾーン情報のない値はUTCとして解釈する

    Args:
        value: ストアから取得した値

    Returns:
        aware datetime、空または解析不能な場合はNone
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip().replace("T", " ")
        if text.endswith("Z"):
            text = text[:-1]
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _optional_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


@dataclass(frozen=True)
class UserRecord:
    """usersテーブルの1行"""

    id: Optional[int]
    username: str
    prefix: str
    last_login: Optional[str] = None

    @classmethod
    def from_row(cls, row: Row) -> "UserRecord":
        raw_id = row.get("id")
        return cls(
            id=int(raw_id) if raw_id is not None else None,
            username=str(row.get("username") or ""),
            prefix=str(row.get("prefix") or ""),
            last_login=_optional_str(row.get("last_login")),
        )


@dataclass(frozen=True)
class KeyRecord:
    """
    ukeysテーブルの1行

    Attributes:
        key: グローバルに一意なキー文字列
        length: 有効日数（作成時に固定）
        prefix: 所有テナント
        id_device: バインド済みデバイス（未バインドはNone）
        time_start: 初回有効化時刻（未有効化はNone）
        time_end: 有効期限（未有効化はNone）
    """

    key: str
    length: int
    prefix: str
    id_key: Optional[int] = None
    id_device: Optional[str] = None
    time_start: Optional[datetime] = None
    time_end: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Row) -> "KeyRecord":
        raw_id = row.get("id_key")
        raw_length = row.get("length")
        return cls(
            id_key=int(raw_id) if raw_id is not None else None,
            key=str(row.get("key") or ""),
            length=int(raw_length) if raw_length is not None else 0,
            prefix=str(row.get("prefix") or ""),
            id_device=_optional_str(row.get("id_device")),
            time_start=parse_timestamp(row.get("time_start")),
            time_end=parse_timestamp(row.get("time_end")),
        )
