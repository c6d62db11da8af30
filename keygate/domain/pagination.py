"""ページネーションパラメータの正規化"""

import math
from dataclasses import dataclass
from typing import Optional

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 50


@dataclass(frozen=True)
class Page:
    page: int
    page_size: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def _parse_number(raw: Optional[str]) -> Optional[int]:
    """数値として解釈できない値はNone（小数は切り捨て）"""
    if raw is None or raw.strip() == "":
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return math.floor(value)


def resolve_page(page: Optional[str], page_size: Optional[str]) -> Page:
    """
    クエリ文字列からページ位置を決定する

    pageは1以上、pageSizeは1〜50に丸める。
    解釈できない値は既定値を使う。

    Args:
        page: ?page の生値
        page_size: ?pageSize または ?limit の生値

    Returns:
        正規化済みのPage
    """
    parsed_page = _parse_number(page)
    parsed_size = _parse_number(page_size)

    resolved_page = DEFAULT_PAGE if parsed_page is None else max(1, parsed_page)
    resolved_size = DEFAULT_PAGE_SIZE if parsed_size is None else parsed_size
    resolved_size = min(MAX_PAGE_SIZE, max(1, resolved_size))
    return Page(page=resolved_page, page_size=resolved_size)
