"""キー管理のスキーマ定義"""

import math
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

from ...domain.keys.generator import (
    MAX_AMOUNT,
    MAX_LENGTH_DAYS,
    MIN_AMOUNT,
    MIN_LENGTH_DAYS,
)


class AddKeyRequest(BaseModel):
    """
    キー生成リクエスト

    数値であれば小数も受け付け、切り捨てて扱う

    Attributes:
        amount: 生成数（1〜30）
        length: 有効日数（1〜30）
    """

    amount: float = Field(strict=True, ge=MIN_AMOUNT, le=MAX_AMOUNT)
    length: float = Field(strict=True, ge=MIN_LENGTH_DAYS, le=MAX_LENGTH_DAYS)

    @field_validator("amount", "length")
    @classmethod
    def floor_value(cls, v: float) -> int:
        return math.floor(v)


class KeyRequest(BaseModel):
    key: StrictStr


class GeneratedKey(BaseModel):
    key: str
    length: int
    prefix: str
    time_start: Optional[datetime] = None
    time_end: Optional[datetime] = None


class AddKeyResponse(BaseModel):
    status: str = "ok"
    generated: int
    keys: list[GeneratedKey]


class KeyListResponse(BaseModel):
    """
    キー一覧レスポンス

    Attributes:
        page: ページ番号
        page_size: ページサイズ
        data: キーの行
    """

    model_config = ConfigDict(populate_by_name=True)

    page: int
    page_size: int = Field(alias="pageSize")
    data: list[dict[str, Any]]


class DeletedResponse(BaseModel):
    status: str = "ok"
    deleted: int
