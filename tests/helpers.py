"""テスト用ヘルパー関数"""

from keygate.core.config import Settings

TEST_SECRET = "test-session-secret"
TEST_STORE_URL = "http://store.test/sql"


def make_settings(**overrides: object) -> Settings:
    """
    テスト用の設定を生成する（.envは読み込まない）

    Args:
        **overrides: 上書きする設定値

    Returns:
        Settings
    """
    values: dict[str, object] = {
        "ENV_MODE": "test",
        "SESSION_SECRET": TEST_SECRET,
        "URL_API_SQL": TEST_STORE_URL,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)  # type: ignore[arg-type]
