"""
セキュリティヘッダーミドルウェアの単体テスト
"""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from keygate.presentation.middleware import SecurityHeadersMiddleware


def make_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(SecurityHeadersMiddleware, csp_policy="default-src 'none'")

    @app.get("/ping")
    async def ping() -> dict[str, str]:
        return {"status": "ok"}

    return app


class TestSecurityHeadersMiddleware:
    """SecurityHeadersMiddlewareのテスト"""

    def test_headers_added(self) -> None:
        response = TestClient(make_app()).get("/ping")

        assert response.status_code == 200
        assert response.headers["Content-Security-Policy"] == "default-src 'none'"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["X-Content-Type-Options"] == "nosniff"
