"""
GET /get-info の統合テスト
"""

from fastapi.testclient import TestClient

from tests.fakes import FakeUserRepository


class TestGetInfo:
    """GET /get-info のテスト"""

    def test_profiles_for_prefix(
        self,
        client: TestClient,
        user_repo: FakeUserRepository,
        auth_headers: dict[str, str],
    ) -> None:
        """同じprefixのユーザーのみ、パスワードを含めずに返すこと"""
        user_repo.add("alice", "secret1", "acme")
        user_repo.add("carol", "secret2", "acme")
        user_repo.add("mallory", "secret3", "other")

        response = client.get("/get-info", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert [row["username"] for row in data["data"]] == ["alice", "carol"]
        assert all("password" not in row for row in data["data"])
        assert set(data["data"][0]) == {"id", "username", "prefix", "last_login"}

    def test_invalid_cookie(self, client: TestClient) -> None:
        """改ざんされたCookieは401になること"""
        response = client.get("/get-info", headers={"Cookie": "session=tampered"})
        assert response.status_code == 401
