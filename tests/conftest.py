"""
pytest設定と共通フィクスチャ

ストアへのHTTP通信は行わず、リポジトリをインメモリ実装に差し替える
"""

from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from keygate.core.app_factory import create_app
from keygate.core.config import Settings
from keygate.infrastructure.security import TokenCodec
from keygate.presentation.api.deps import get_key_repository, get_user_repository
from tests.fakes import FakeKeyRepository, FakeUserRepository
from tests.helpers import TEST_SECRET, make_settings


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def codec() -> TokenCodec:
    return TokenCodec(TEST_SECRET)


@pytest.fixture
def user_repo() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def key_repo() -> FakeKeyRepository:
    return FakeKeyRepository()


@pytest.fixture
def app(
    settings: Settings,
    user_repo: FakeUserRepository,
    key_repo: FakeKeyRepository,
) -> FastAPI:
    """
    リポジトリをインメモリ実装に差し替えたアプリケーション
    """
    application = create_app(settings)
    application.dependency_overrides[get_user_repository] = lambda: user_repo
    application.dependency_overrides[get_key_repository] = lambda: key_repo
    return application


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """
    テスト用FastAPIクライアント

    Yields:
        FastAPI TestClient
    """
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(codec: TokenCodec) -> dict[str, str]:
    """
    prefix "acme" のユーザーのセッションCookie

    Secure属性付きCookieはhttpのテストクライアントから自動送信されないため、
    ヘッダーとして直接渡す
    """
    token = codec.encode_session("alice", "acme", 3600)
    return {"Cookie": f"session={token}"}
