"""
リモートSQL実行エンドポイントのクライアント

エンドポイントは POST JSON {query} または GET ?query= を受け付け、
成功時は {status: "success", data: [...]} を返す。
書き込み系は data に {affectedRows: n} を返すことがある。
"""

import json
from dataclasses import dataclass, field
from typing import Any, Optional

import httpx

from ...core.config import Settings
from ...core.logging import get_logger
from ...domain.exceptions import ErrorCode, InternalError, StoreError
from ...domain.models import Row
from .query import Query

logger = get_logger(__name__)


@dataclass
class StoreResult:
    """
    クエリ実行結果

    Attributes:
        rows: 取得行
        affected_rows: 更新行数（エンドポイントが返さない場合はNone）
    """

    rows: list[Row] = field(default_factory=list)
    affected_rows: Optional[int] = None


class SqlStoreClient:
    """
    リモートストアへのクエリ送信

    呼び出しごとにHTTPクライアントを生成する（接続プールは持たない）。
    自動リトライは行わない。
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            settings: アプリケーション設定
            transport: HTTPトランスポート（テスト時にモックを渡せる）
        """
        self._url = settings.URL_API_SQL
        self._method = settings.SQL_API_METHOD
        self._param_style = settings.SQL_API_PARAM_STYLE
        self._timeout = settings.SQL_API_TIMEOUT
        self._transport = transport

    async def execute(
        self, query: Query, error_code: ErrorCode = ErrorCode.SQL_QUERY_FAILED
    ) -> StoreResult:
        """
        クエリを実行

        Args:
            query: 実行するクエリ
            error_code: エンドポイントがエラーを返した場合のエラーコード

        Returns:
            StoreResult

        Raises:
            InternalError: ストアが設定されていない場合
            StoreError: 通信失敗、タイムアウト、エラー応答の場合
        """
        if not self._url:
            raise InternalError(
                "Store endpoint is not configured",
                code=ErrorCode.CONFIGURATION_ERROR,
            )
        if not query.text.strip():
            raise StoreError("Query must be a non-empty string", code=error_code)

        try:
            response = await self._send(query)
        except httpx.TimeoutException as e:
            logger.error(f"SQL API timed out: {query.redacted()}")
            raise StoreError(
                "SQL API request timed out", code=ErrorCode.QUERY_TIMEOUT
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"SQL API request failed: {e} query={query.redacted()}")
            raise StoreError(
                f"SQL API request failed: {e}",
                code=ErrorCode.DATABASE_CONNECTION_FAILED,
            ) from e

        try:
            return self._parse(response)
        except StoreError as e:
            logger.error(f"{e.message} query={query.redacted()}")
            e.code = error_code
            raise

    async def _send(self, query: Query) -> httpx.Response:
        payload: dict[str, Any]
        if self._param_style == "bind":
            payload = {"query": query.text, "params": query.bound_params()}
        else:
            payload = {"query": query.render()}

        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport
        ) as client:
            if self._method == "GET":
                params = {"query": payload["query"]}
                if "params" in payload:
                    params["params"] = json.dumps(payload["params"])
                return await client.get(self._url, params=params)
            return await client.post(self._url, json=payload)

    def _parse(self, response: httpx.Response) -> StoreResult:
        try:
            body = response.json()
        except ValueError:
            raise StoreError("SQL API returned non-JSON response")

        if not isinstance(body, dict):
            raise StoreError("SQL API returned an unexpected response shape")

        if response.is_error:
            if body.get("status") == "error":
                message = body.get("message") or "Unknown error"
            elif "error" in body:
                message = body["error"]
            else:
                message = f"HTTP {response.status_code}"
            raise StoreError(f"SQL API error: {message}")

        status = body.get("status")
        if status == "success":
            return _to_result(body.get("data"))
        if status == "error":
            raise StoreError(f"SQL API error: {body.get('message') or 'Unknown error'}")
        if "error" in body:
            raise StoreError(f"SQL API error: {body['error']}")

        raise StoreError("SQL API returned an unexpected response shape")


def _to_result(data: Any) -> StoreResult:
    if isinstance(data, list):
        return StoreResult(rows=[row for row in data if isinstance(row, dict)])
    if isinstance(data, dict):
        affected = data.get("affectedRows", data.get("affected_rows"))
        return StoreResult(
            rows=[],
            affected_rows=int(affected) if isinstance(affected, (int, float)) else None,
        )
    if data is None:
        return StoreResult()
    raise StoreError("SQL API returned an unexpected response shape")
