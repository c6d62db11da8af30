"""
キー有効化サービス

ライフサイクル判定（domain.keys.lifecycle）とストアへの条件付き更新をつなぐ。
同一キーへの同時有効化は条件付き更新で直列化し、競合に負けた場合は
レコードを読み直して判定をやり直す。
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from ...core.logging import get_logger
from ...domain.exceptions import InternalError
from ...domain.keys.lifecycle import (
    ActivationDecision,
    ActivationOutcome,
    decide_activation,
)
from .key_repository import KeyRepository

logger = get_logger(__name__)

MAX_ATTEMPTS = 3


def utc_now() -> datetime:
    # ストアの精度に合わせて秒未満を切り捨てる
    return datetime.now(timezone.utc).replace(microsecond=0)


@dataclass(frozen=True)
class ActivationResult:
    """
    有効化の結果

    Attributes:
        decision: 最終的な判定
        updated: 更新行数
    """

    decision: ActivationDecision
    updated: int = 0


class KeyActivationService:
    """
    デバイスクライアントのログイン処理
    """

    def __init__(
        self,
        repository: KeyRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Args:
            repository: キーリポジトリ
            clock: 現在時刻の取得関数（テスト時に差し替え可能）
        """
        self.repository = repository
        self.clock = clock

    async def activate(self, key: str, id_device: str) -> ActivationResult:
        """
        キーを有効化する

        Args:
            key: キー文字列
            id_device: 要求元デバイスID

        Returns:
            ActivationResult
        """
        for attempt in range(1, MAX_ATTEMPTS + 1):
            record = await self.repository.find_by_key(key)
            decision = decide_activation(record, id_device, self.clock())

            if not decision.requires_write:
                if decision.is_rejection:
                    logger.info(
                        f"Key activation rejected: {decision.outcome.value} (key={key})"
                    )
                return ActivationResult(decision=decision)

            updated = await self._apply(decision, key, id_device)
            if updated is None:
                confirmed = await self._confirm(decision, key, id_device)
                if confirmed is not None:
                    return confirmed
            elif updated:
                logger.info(
                    f"Key activation applied: {decision.outcome.value} (key={key})"
                )
                return ActivationResult(decision=decision, updated=updated)

            logger.warning(
                f"Key activation lost a concurrent update, retrying "
                f"(key={key}, attempt={attempt})"
            )

        logger.error(f"Key activation did not converge (key={key})")
        return ActivationResult(
            decision=ActivationDecision(outcome=ActivationOutcome.UNKNOWN)
        )

    async def _apply(
        self, decision: ActivationDecision, key: str, id_device: str
    ) -> Optional[int]:
        if decision.outcome is not ActivationOutcome.FIRST_LOGIN:
            return await self.repository.bind_device(key, id_device)
        if decision.time_start is None or decision.time_end is None:
            raise InternalError(
                "First activation decided without a validity period",
                details={"key": key},
            )
        return await self.repository.activate_first(
            key, id_device, decision.time_start, decision.time_end
        )

    async def _confirm(
        self, decision: ActivationDecision, key: str, id_device: str
    ) -> Optional[ActivationResult]:
        """
        更新行数が返らない場合、読み直してバインド先を確認する

        同じデバイスからの別の要求が先に初回有効化していた場合は、
        読み直したレコードで判定し直す（更新なし）。

        Returns:
            確定した結果、競合に負けて再試行が必要な場合はNone
        """
        record = await self.repository.find_by_key(key)
        if (
            record is None
            or record.id_device != id_device
            or record.time_start is None
        ):
            return None

        if (
            decision.outcome is ActivationOutcome.FIRST_LOGIN
            and record.time_start != decision.time_start
        ):
            redecided = decide_activation(record, id_device, self.clock())
            logger.info(
                f"Key was activated by another request: {redecided.outcome.value} "
                f"(key={key})"
            )
            return ActivationResult(decision=redecided)

        logger.info(f"Key activation applied: {decision.outcome.value} (key={key})")
        return ActivationResult(decision=decision, updated=1)
