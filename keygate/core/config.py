from functools import lru_cache
from typing import Literal, Optional
from urllib.parse import urlparse

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .logging import get_logger

logger = get_logger(__name__)


class Settings(BaseSettings):
    """
    アプリケーション設定

    create_app()で一度だけ生成し、app.state経由で各層へ渡す
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # 未定義のフィールドを無視
        frozen=True,
    )

    ENV_MODE: Literal["development", "production", "test"] = "development"

    # 未設定の場合は本番以外でデバッグ扱い
    IS_DEBUG: Optional[bool] = None

    BACKEND_CORS_ORIGINS: str | list[str] = []

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: str | list[str]) -> list[str] | str:
        if v == "":
            return []
        if v == "*":
            return ["*"]
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        if isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    SECURITY_HEADERS: bool = False
    CSP_POLICY: str = (
        "default-src 'self'; img-src 'self' data:; script-src 'self'; style-src 'self'"
    )

    # セッショントークン
    SESSION_SECRET: str = ""
    SESSION_COOKIE_NAME: str = "session"
    SESSION_EXPIRE: int = 60 * 60 * 24  # 1 day
    BEARER_TOKEN_EXPIRE: int = 60 * 60 * 24 * 7  # 7 days
    SESSION_COOKIE_SAMESITE: Literal["lax", "strict", "none"] = "lax"

    @field_validator("SESSION_SECRET")
    @classmethod
    def validate_session_secret(cls, v: str) -> str:
        """セッションシークレット検証"""
        if not v or not v.strip():
            raise ValueError(
                'SESSION_SECRET is not set. Generate one with: python -c "import secrets; print(secrets.token_urlsafe(32))"'
            )
        return v

    # リモートSQL実行エンドポイント
    URL_API_SQL: str = ""
    SQL_API_METHOD: Literal["POST", "GET"] = "POST"
    SQL_API_PARAM_STYLE: Literal["inline", "bind"] = "inline"
    SQL_API_TIMEOUT: float = 10.0

    @field_validator("URL_API_SQL")
    @classmethod
    def validate_sql_api_url(cls, v: str) -> str:
        """SQL APIのURL検証"""
        v = v.strip()
        if not v:
            logger.warning("URL_API_SQL is not set. Store access disabled.")
            return ""

        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("Invalid URL_API_SQL. Expected a valid absolute URL.")
        return v

    @property
    def has_store(self) -> bool:
        """ストア設定有無"""
        return bool(self.URL_API_SQL)

    SENTRY_DSN: Optional[str] = None
    SENTRY_TRACES_SAMPLE_RATE: float = 1.0

    @field_validator("SENTRY_DSN")
    @classmethod
    def sentry_dsn_can_be_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None or v == "":
            return None
        return v

    NEW_RELIC_LICENSE_KEY: Optional[str] = None
    NEW_RELIC_APP_NAME: str = "keygate"
    NEW_RELIC_HIGH_SECURITY: bool = False
    NEW_RELIC_MONITOR_MODE: bool = True

    @property
    def debug_enabled(self) -> bool:
        """エラーレスポンスに詳細を含めるかどうか"""
        if self.IS_DEBUG is not None:
            return self.IS_DEBUG
        return not self.is_production

    @property
    def is_development(self) -> bool:
        """開発環境かどうか"""
        return self.ENV_MODE == "development"

    @property
    def is_production(self) -> bool:
        """本番環境かどうか"""
        return self.ENV_MODE == "production"

    @property
    def is_test(self) -> bool:
        """テスト環境かどうか"""
        return self.ENV_MODE == "test"


@lru_cache
def get_settings() -> Settings:
    """
    アプリケーション設定を取得（キャッシュ）
    """
    return Settings()
