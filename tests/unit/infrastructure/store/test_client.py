"""
ストアクライアントの単体テスト

HTTP通信はhttpx.MockTransportで置き換える
"""

import asyncio
import json
from typing import Callable

import httpx
import pytest

from keygate.domain.exceptions import ErrorCode, InternalError, StoreError
from keygate.infrastructure.store import Query, SqlStoreClient
from tests.helpers import make_settings

Handler = Callable[[httpx.Request], httpx.Response]


def make_client(handler: Handler, **overrides: object) -> SqlStoreClient:
    return SqlStoreClient(
        make_settings(**overrides), transport=httpx.MockTransport(handler)
    )


class TestRequestShape:
    """送信形式のテスト"""

    def test_post_inline(self) -> None:
        """inline形式ではエスケープ済みのSQLのみを送ること"""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"status": "success", "data": []})

        client = make_client(handler)
        asyncio.run(client.execute(Query("SELECT * FROM t WHERE a = ?", ("x'y",))))

        assert seen[0].method == "POST"
        assert json.loads(seen[0].content) == {
            "query": "SELECT * FROM t WHERE a = 'x\\'y'"
        }

    def test_post_bind(self) -> None:
        """bind形式ではクエリとパラメータを分けて送ること"""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"status": "success", "data": []})

        client = make_client(handler, SQL_API_PARAM_STYLE="bind")
        asyncio.run(client.execute(Query("SELECT * FROM t WHERE a = ?", ("x",))))

        assert json.loads(seen[0].content) == {
            "query": "SELECT * FROM t WHERE a = ?",
            "params": ["x"],
        }

    def test_get(self) -> None:
        """GETの場合はクエリ文字列で送ること"""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"status": "success", "data": []})

        client = make_client(handler, SQL_API_METHOD="GET")
        asyncio.run(client.execute(Query("SELECT 1")))

        assert seen[0].method == "GET"
        assert seen[0].url.params["query"] == "SELECT 1"


class TestResponseParsing:
    """応答の解釈のテスト"""

    def test_rows(self) -> None:
        client = make_client(
            lambda request: httpx.Response(
                200, json={"status": "success", "data": [{"id": 1}]}
            )
        )
        result = asyncio.run(client.execute(Query("SELECT 1")))
        assert result.rows == [{"id": 1}]
        assert result.affected_rows is None

    def test_affected_rows(self) -> None:
        """書き込み系はaffectedRowsを返すこと"""
        client = make_client(
            lambda request: httpx.Response(
                200, json={"status": "success", "data": {"affectedRows": 2}}
            )
        )
        result = asyncio.run(client.execute(Query("DELETE FROM t")))
        assert result.rows == []
        assert result.affected_rows == 2

    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, json={"status": "error", "message": "syntax"}),
            httpx.Response(200, json={"error": "boom"}),
            httpx.Response(200, text="<html>oops</html>"),
            httpx.Response(500, json={"status": "error", "message": "down"}),
            httpx.Response(200, json=[1, 2]),
        ],
    )
    def test_error_shapes(self, response: httpx.Response) -> None:
        """エラー応答はストアエラーになり、呼び出し側のコードが付くこと"""
        client = make_client(lambda request: response)
        with pytest.raises(StoreError) as exc_info:
            asyncio.run(
                client.execute(Query("SELECT 1"), error_code=ErrorCode.INSERT_FAILED)
            )
        assert exc_info.value.code == ErrorCode.INSERT_FAILED


class TestTransportFailures:
    """通信失敗のテスト"""

    def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(StoreError) as exc_info:
            asyncio.run(make_client(handler).execute(Query("SELECT 1")))
        assert exc_info.value.code == ErrorCode.QUERY_TIMEOUT

    def test_connection_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(StoreError) as exc_info:
            asyncio.run(make_client(handler).execute(Query("SELECT 1")))
        assert exc_info.value.code == ErrorCode.DATABASE_CONNECTION_FAILED

    def test_not_configured(self) -> None:
        """エンドポイント未設定の場合は内部エラー"""
        client = SqlStoreClient(make_settings(URL_API_SQL=""))
        with pytest.raises(InternalError) as exc_info:
            asyncio.run(client.execute(Query("SELECT 1")))
        assert exc_info.value.code == ErrorCode.CONFIGURATION_ERROR
