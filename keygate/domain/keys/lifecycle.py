"""
キーのライフサイクル判定

未使用 -> 初回利用 -> デバイスにバインド -> 期限切れ

判定は純粋関数で、ストアへの反映はリポジトリ側が条件付き更新で行う。
評価順序は固定（最初に一致したものを採用）:

1. 別デバイス      -> 拒否（現在のデバイスを返す）
2. 期限切れ        -> 拒否（期限を返す）
3. 初回有効化      -> time_start/time_end/id_device を設定
4. デバイス再登録  -> id_device のみ設定
5. 同一デバイス    -> 変更なし
6. それ以外        -> 不明な状態として拒否
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Optional

from ..exceptions.error_codes import ErrorCode
from ..models import KeyRecord, format_timestamp


class ActivationOutcome(str, Enum):
    """判定結果"""

    WRONG_DEVICE = "wrong_device"
    EXPIRED = "expired"
    FIRST_LOGIN = "first_login"
    RESET_DEVICE = "reset_device"
    WELCOME_BACK = "welcome_back"
    UNKNOWN = "unknown"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class ActivationDecision:
    """
    ライフサイクル判定の結果

    Attributes:
        outcome: 判定結果
        record: 判定に使ったレコード
        time_start: 初回有効化で設定する開始時刻
        time_end: 初回有効化で設定する終了時刻
    """

    outcome: ActivationOutcome
    record: Optional[KeyRecord] = None
    time_start: Optional[datetime] = None
    time_end: Optional[datetime] = None

    @property
    def is_rejection(self) -> bool:
        return self.outcome in (
            ActivationOutcome.WRONG_DEVICE,
            ActivationOutcome.EXPIRED,
            ActivationOutcome.UNKNOWN,
            ActivationOutcome.NOT_FOUND,
        )

    @property
    def requires_write(self) -> bool:
        return self.outcome in (
            ActivationOutcome.FIRST_LOGIN,
            ActivationOutcome.RESET_DEVICE,
        )


def decide_activation(
    record: Optional[KeyRecord], id_device: str, now: datetime
) -> ActivationDecision:
    """
    キーレコードと要求デバイスから遷移を決定する

    Args:
        record: キーレコード（存在しない場合はNone）
        id_device: 要求元デバイスID
        now: 現在時刻（UTC、aware）

    Returns:
        ActivationDecision
    """
    if record is None:
        return ActivationDecision(outcome=ActivationOutcome.NOT_FOUND)

    if record.id_device and record.id_device != id_device:
        return ActivationDecision(outcome=ActivationOutcome.WRONG_DEVICE, record=record)

    if record.time_end is not None and record.time_end < now:
        return ActivationDecision(outcome=ActivationOutcome.EXPIRED, record=record)

    if record.time_start is None:
        return ActivationDecision(
            outcome=ActivationOutcome.FIRST_LOGIN,
            record=record,
            time_start=now,
            time_end=now + timedelta(days=record.length),
        )

    if not record.id_device:
        return ActivationDecision(outcome=ActivationOutcome.RESET_DEVICE, record=record)

    if record.id_device == id_device and (
        record.time_end is None or record.time_end >= now
    ):
        return ActivationDecision(outcome=ActivationOutcome.WELCOME_BACK, record=record)

    return ActivationDecision(outcome=ActivationOutcome.UNKNOWN, record=record)


def build_client_response(decision: ActivationDecision, updated: int) -> dict[str, Any]:
    """
    デバイスクライアント向けのレスポンスボディを組み立てる

    Args:
        decision: 判定結果
        updated: 更新行数

    Returns:
        暗号化前のレスポンスJSON
    """
    outcome = decision.outcome
    record = decision.record

    if outcome is ActivationOutcome.NOT_FOUND:
        return {
            "status": "error",
            "message": "Key not found",
            "errorCode": ErrorCode.KEY_NOT_FOUND.value,
        }
    if outcome is ActivationOutcome.WRONG_DEVICE and record is not None:
        return {
            "status": "error",
            "message": "Wrong device ID",
            "current_device": record.id_device,
        }
    if outcome is ActivationOutcome.EXPIRED and record is not None:
        expired_at = format_timestamp(record.time_end) if record.time_end else None
        return {
            "status": "error",
            "message": "License expired",
            "expired_at": expired_at,
        }
    if decision.is_rejection:
        return {"status": "error", "message": "Unknown error"}

    return {"status": "ok", "message": outcome.value, "updated": updated}
