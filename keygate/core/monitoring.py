"""監視ツール（Sentry, New Relic）の初期化"""

import os

import newrelic.agent
import sentry_sdk

from .config import Settings
from .logging import get_logger

logger = get_logger(__name__)


def init_monitoring(settings: Settings) -> None:
    """
    Sentry/New Relicの初期化

    New Relicは本番環境でのみ有効化される。
    設定値が無い場合はスキップする

    Args:
        settings: アプリケーション設定
    """
    # New Relic
    if settings.is_production and settings.NEW_RELIC_LICENSE_KEY:
        os.environ["NEW_RELIC_LICENSE_KEY"] = settings.NEW_RELIC_LICENSE_KEY
        os.environ["NEW_RELIC_APP_NAME"] = settings.NEW_RELIC_APP_NAME

        newrelic_config = newrelic.agent.global_settings()
        newrelic_config.high_security = settings.NEW_RELIC_HIGH_SECURITY
        newrelic_config.monitor_mode = settings.NEW_RELIC_MONITOR_MODE
        newrelic_config.app_name = f"{settings.NEW_RELIC_APP_NAME}[{settings.ENV_MODE}]"

        newrelic.agent.initialize(environment=settings.ENV_MODE)
        logger.info(f"New Relic is enabled (name: {newrelic_config.app_name})")
    else:
        logger.info(
            f"New Relic is disabled on {settings.ENV_MODE} mode"
            if not settings.is_production
            else "New Relic license key is not set"
        )

    # Sentry
    if settings.SENTRY_DSN:
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            environment=settings.ENV_MODE,
            traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
            # リクエストボディ（暗号化トークン・パスワード）は送らない
            send_default_pii=False,
            max_request_body_size="never",
        )
        logger.info(f"Sentry is enabled on {settings.ENV_MODE} mode")
    else:
        logger.info(f"Sentry DSN is not set ({settings.ENV_MODE} mode)")
