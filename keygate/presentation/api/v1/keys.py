"""キー管理（プリンシパルのprefixに限定）"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ....core.logging import get_logger
from ....domain.keys import generate_keys
from ....domain.pagination import resolve_page
from ....domain.session import Principal
from ....infrastructure.repositories import KeyRepository
from ...schemas.keys import (
    AddKeyRequest,
    AddKeyResponse,
    DeletedResponse,
    GeneratedKey,
    KeyListResponse,
    KeyRequest,
)
from ..deps import get_key_repository, require_principal

router = APIRouter()
logger = get_logger(__name__)


@router.get("/get-key", response_model=KeyListResponse)
async def get_keys(
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    limit: Optional[str] = Query(None),
    principal: Principal = Depends(require_principal),
    keys: KeyRepository = Depends(get_key_repository),
) -> KeyListResponse:
    """
    キー一覧を取得

    pageSizeが無い場合はlimitを使う
    """
    resolved = resolve_page(page, page_size if page_size is not None else limit)
    rows = await keys.list_keys(principal.prefix, resolved.page_size, resolved.offset)
    return KeyListResponse(page=resolved.page, page_size=resolved.page_size, data=rows)


@router.post("/add-key", response_model=AddKeyResponse)
async def add_keys(
    body: AddKeyRequest,
    principal: Principal = Depends(require_principal),
    keys: KeyRepository = Depends(get_key_repository),
) -> AddKeyResponse:
    """
    キーを生成して一括登録

    1回のINSERTで登録し、失敗してもリトライしない
    """
    amount, length = int(body.amount), int(body.length)
    generated = generate_keys(principal.prefix, length, amount)
    await keys.insert_keys(principal.prefix, generated, length)
    logger.info(f"Generated {len(generated)} keys (prefix={principal.prefix})")
    return AddKeyResponse(
        generated=len(generated),
        keys=[
            GeneratedKey(key=key, length=length, prefix=principal.prefix)
            for key in generated
        ],
    )


@router.post("/delete-key", response_model=DeletedResponse)
async def delete_key(
    body: KeyRequest,
    principal: Principal = Depends(require_principal),
    keys: KeyRepository = Depends(get_key_repository),
) -> DeletedResponse:
    deleted = await keys.delete_key(principal.prefix, body.key)
    return DeletedResponse(deleted=deleted)


@router.post("/reset-key", response_model=DeletedResponse)
async def reset_key(
    body: KeyRequest,
    principal: Principal = Depends(require_principal),
    keys: KeyRepository = Depends(get_key_repository),
) -> DeletedResponse:
    """デバイスの紐付けを解除（レスポンスのフィールド名はdeletedのまま）"""
    reset = await keys.reset_device(principal.prefix, body.key)
    return DeletedResponse(deleted=reset)
