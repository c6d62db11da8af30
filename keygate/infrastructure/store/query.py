"""
パラメータ付きクエリ

クエリ本文は `?` プレースホルダのみを使い、値は別に保持する。
エンドポイントがパラメータを受け付けない場合はSQLリテラルとして埋め込む。
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Sequence

from ...domain.models import Scalar, format_timestamp

PLACEHOLDER = "?"

# MySQLのmysql_real_escape_stringと同じ対象文字
_ESCAPES = {
    "\\": "\\\\",
    "\0": "\\0",
    "\n": "\\n",
    "\r": "\\r",
    "\x1a": "\\Z",
    "'": "\\'",
    '"': '\\"',
}

QueryParam = Scalar | datetime


@dataclass(frozen=True)
class Query:
    """
    クエリ本文とバインド値

    Attributes:
        text: `?` プレースホルダを含むSQL
        params: バインド値
    """

    text: str
    params: tuple[QueryParam, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        expected = self.text.count(PLACEHOLDER)
        if expected != len(self.params):
            raise ValueError(
                f"Query expects {expected} parameters, got {len(self.params)}"
            )

    def bound_params(self) -> list[Scalar]:
        """JSON送信用のバインド値（datetimeは文字列化）"""
        return [
            format_timestamp(p) if isinstance(p, datetime) else p for p in self.params
        ]

    def render(self) -> str:
        """
        バインド値をエスケープ済みリテラルとして埋め込んだSQLを返す

        Returns:
            実行可能なSQL文字列
        """
        parts = self.text.split(PLACEHOLDER)
        rendered = [parts[0]]
        for value, part in zip(self.params, parts[1:]):
            rendered.append(to_sql_literal(value))
            rendered.append(part)
        return "".join(rendered)

    def redacted(self, limit: int = 200) -> str:
        """ログ出力用（値は含めず、長さを制限）"""
        if len(self.text) <= limit:
            return self.text
        return self.text[:limit] + "..."


def escape_string(value: str) -> str:
    return "".join(_ESCAPES.get(ch, ch) for ch in value)


def to_sql_literal(value: Any) -> str:
    """
    値をSQLリテラルに変換

    Args:
        value: スカラー値

    Returns:
        SQLリテラル文字列

    Raises:
        TypeError: 対応していない型の場合
        ValueError: NaN/Infの場合
    """
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise ValueError("Cannot render non-finite float as SQL literal")
        return repr(value)
    if isinstance(value, datetime):
        return f"'{format_timestamp(value)}'"
    if isinstance(value, str):
        return f"'{escape_string(value)}'"
    raise TypeError(f"Unsupported SQL parameter type: {type(value).__name__}")


def values_placeholders(rows: int, columns: int) -> str:
    """
    複数行INSERT用のプレースホルダ列を生成

    Args:
        rows: 行数
        columns: 列数

    Returns:
        "(?, ?), (?, ?)" 形式の文字列
    """
    row = "(" + ", ".join([PLACEHOLDER] * columns) + ")"
    return ", ".join([row] * rows)


def flatten(rows: Sequence[Sequence[QueryParam]]) -> tuple[QueryParam, ...]:
    return tuple(value for row in rows for value in row)
