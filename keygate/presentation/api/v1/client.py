"""
デバイスクライアントのログイン

リクエスト・レスポンスともにトークンコーデックで暗号化したテキスト。
状態遷移による拒否も暗号化したボディで返す（HTTPステータスは200）。
"""

from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from ....core.logging import get_logger
from ....domain.exceptions import ErrorCode, ParsingError, ValidationError
from ....domain.keys import build_client_response
from ....infrastructure.repositories import KeyActivationService
from ....infrastructure.security import TokenCodec
from ..deps import get_activation_service, get_token_codec

router = APIRouter()
logger = get_logger(__name__)

MAX_BODY_BYTES = 16 * 1024
REQUIRED_FIELDS = ("key", "id_device")


def parse_client_request(codec: TokenCodec, raw: bytes) -> tuple[str, str]:
    """
    暗号化されたリクエストボディを復号して検証する

    Args:
        codec: トークンコーデック
        raw: リクエストボディ

    Returns:
        (key, id_device)

    Raises:
        ParsingError: サイズ超過、または復号できない場合
        ValidationError: フィールドが欠落している、または文字列でない場合
    """
    if len(raw) > MAX_BODY_BYTES:
        raise ParsingError(
            "Request body too large", code=ErrorCode.REQUEST_BODY_TOO_LARGE
        )

    data: Any = codec.decrypt_json(raw.decode("utf-8", errors="replace").strip())
    if not isinstance(data, dict):
        raise ParsingError(
            "Invalid encrypted JSON", code=ErrorCode.INVALID_REQUEST_FORMAT
        )

    missing = [name for name in REQUIRED_FIELDS if data.get(name) in (None, "")]
    if missing:
        raise ValidationError(
            f"Missing required fields: {', '.join(missing)}",
            code=ErrorCode.MISSING_FIELDS,
            details={"fields": missing},
        )

    key, id_device = data["key"], data["id_device"]
    if not isinstance(key, str) or not isinstance(id_device, str):
        raise ValidationError(
            "key and id_device must be strings", code=ErrorCode.INVALID_FIELD_TYPE
        )
    return key, id_device


@router.post("/login-client", response_class=PlainTextResponse)
async def login_client(
    request: Request,
    codec: TokenCodec = Depends(get_token_codec),
    activation: KeyActivationService = Depends(get_activation_service),
) -> PlainTextResponse:
    """
    キーの有効化

    復号できないボディは400、それ以外の結果は暗号化して返す
    """
    key, id_device = parse_client_request(codec, await request.body())
    result = await activation.activate(key, id_device)
    body = build_client_response(result.decision, result.updated)
    return PlainTextResponse(codec.encrypt_json(body))
